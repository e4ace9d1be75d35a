"""Codes of keyboard keys, ordinary and extended."""

from __future__ import annotations

from enum import IntEnum

_BASE = 0x1000
_EXTEND = 0x2000
_TIMEOUT = 0x4000


class Key(IntEnum):
    """Key codes: ordinary keys sit on BASE, extended keys on EXTEND."""

    BASE = _BASE
    EXTEND = _EXTEND
    TIMEOUT = _TIMEOUT

    ANYKEY = _BASE + 0x00FF
    ESCAPE = _BASE + 0x001B
    CR = _BASE + 0x000A
    RETURN = _BASE + 0x000D
    SPACE = _BASE + 0x0020
    BACKSPACE = _BASE + 0x0008
    TAB = _BASE + 0x0009
    SHIFTTAB = _EXTEND + 0x000F
    CTRLTAB = _EXTEND + 0x0094

    F1 = _EXTEND + 0x3B
    F2 = _EXTEND + 0x3C
    F3 = _EXTEND + 0x3D
    F4 = _EXTEND + 0x3E
    F5 = _EXTEND + 0x3F
    F6 = _EXTEND + 0x40
    F7 = _EXTEND + 0x41
    F8 = _EXTEND + 0x42
    F9 = _EXTEND + 0x43
    F10 = _EXTEND + 0x44
    F11 = _EXTEND + 0x85
    F12 = _EXTEND + 0x86

    ALTF1 = _EXTEND + 0x68
    ALTF2 = _EXTEND + 0x69
    ALTF3 = _EXTEND + 0x6A
    ALTF4 = _EXTEND + 0x6B
    ALTF5 = _EXTEND + 0x6C
    ALTF6 = _EXTEND + 0x6D
    ALTF7 = _EXTEND + 0x6E
    ALTF8 = _EXTEND + 0x6F
    ALTF9 = _EXTEND + 0x70
    ALTF10 = _EXTEND + 0x71
    ALTF11 = _EXTEND + 0x8B
    ALTF12 = _EXTEND + 0x8C

    CTLF1 = _EXTEND + 0x5E
    CTLF2 = _EXTEND + 0x5F
    CTLF3 = _EXTEND + 0x60
    CTLF4 = _EXTEND + 0x61
    CTLF5 = _EXTEND + 0x62
    CTLF6 = _EXTEND + 0x63
    CTLF7 = _EXTEND + 0x64
    CTLF8 = _EXTEND + 0x65
    CTLF9 = _EXTEND + 0x66
    CTLF10 = _EXTEND + 0x67
    CTLF11 = _EXTEND + 0x89
    CTLF12 = _EXTEND + 0x8A

    END = _EXTEND + 0x4F
    DNARR = _EXTEND + 0x50
    PGDN = _EXTEND + 0x51
    LEFT = _EXTEND + 0x4B
    NUMPAD5 = _EXTEND + 0x4C
    RIGHT = _EXTEND + 0x4D
    HOME = _EXTEND + 0x47
    UPARR = _EXTEND + 0x48
    PGUP = _EXTEND + 0x49

    ALT_A = _EXTEND + 0x1E
    ALT_B = _EXTEND + 0x30
    ALT_C = _EXTEND + 0x2E
    ALT_D = _EXTEND + 0x20
    ALT_E = _EXTEND + 0x12
    ALT_F = _EXTEND + 0x21
    ALT_G = _EXTEND + 0x22
    ALT_H = _EXTEND + 0x23
    ALT_I = _EXTEND + 0x17
    ALT_J = _EXTEND + 0x24
    ALT_K = _EXTEND + 0x25
    ALT_L = _EXTEND + 0x26
    ALT_M = _EXTEND + 0x32
    ALT_N = _EXTEND + 0x31
    ALT_O = _EXTEND + 0x18
    ALT_P = _EXTEND + 0x19
    ALT_Q = _EXTEND + 0x10
    ALT_R = _EXTEND + 0x13
    ALT_S = _EXTEND + 0x1F
    ALT_T = _EXTEND + 0x14
    ALT_U = _EXTEND + 0x16
    ALT_V = _EXTEND + 0x2F
    ALT_W = _EXTEND + 0x11
    ALT_X = _EXTEND + 0x2D
    ALT_Y = _EXTEND + 0x15
    ALT_Z = _EXTEND + 0x2C


def is_extended(code: int) -> bool:
    """Whether ``code`` is an extended key code."""
    return bool(int(code) & _EXTEND)