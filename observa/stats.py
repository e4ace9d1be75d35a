"""Running statistics that follow a series of observable numbers."""

from __future__ import annotations

import math
from typing import Any, Iterable, Iterator

from observa.callback import Observer
from observa.msgcb import MessageCallbacks
from observa.numeric import Double, ObservableNumber


class NumberSeries:
    """An ordered series of observable numbers.

    Watchers on ``post_insert_cb`` hear about an element after it is
    appended; watchers on ``pre_erase_cb`` hear about one just before it
    is removed. Both receive ``(element,)``.
    """

    def __init__(self, values: Iterable[Any] = ()) -> None:
        self._items: list[ObservableNumber] = [self._wrap(v) for v in values]
        self.post_insert_cb = MessageCallbacks(self)
        self.pre_erase_cb = MessageCallbacks(self)

    @staticmethod
    def _wrap(value: Any) -> ObservableNumber:
        return value if isinstance(value, ObservableNumber) else Double(value)

    def append(self, value: Any) -> ObservableNumber:
        """Add ``value`` at the end and return the stored element."""
        element = self._wrap(value)
        self._items.append(element)
        self.post_insert_cb.invoke((element,))
        return element

    def remove(self, element: Any) -> None:
        """Remove ``element``, matched by identity first, then by value."""
        index = next(
            (i for i, item in enumerate(self._items) if item is element), None
        )
        if index is None:
            index = next(
                (i for i, item in enumerate(self._items) if item == element), None
            )
        if index is None:
            raise ValueError(f"{element!r} is not in the series")
        target = self._items[index]
        self.pre_erase_cb.invoke((target,))
        del self._items[index]

    def __iter__(self) -> Iterator[ObservableNumber]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> ObservableNumber:
        return self._items[index]

    def __repr__(self) -> str:
        return f"NumberSeries({[item.value() for item in self._items]!r})"


class _SeriesStatistic(Double):
    """A double kept up to date with a statistic of a :class:`NumberSeries`."""

    def __init__(self, series: NumberSeries | None = None) -> None:
        super().__init__(0.0)
        self._series: NumberSeries | None = None
        self._reset_sums()
        if series is not None:
            self._series = series
            self._hookup()

    def set_data(self, series: NumberSeries) -> None:
        """Follow ``series`` instead of the current one."""
        self._unhook()
        self._series = series
        self._hookup()

    def detach(self) -> None:
        """Stop following the current series."""
        self._unhook()
        self._series = None

    def _hookup(self) -> None:
        self._reset_sums()
        series = self._series
        if series is None:
            return
        series.post_insert_cb.install(Observer(self, _SeriesStatistic._on_vector_add))
        series.pre_erase_cb.install(Observer(self, _SeriesStatistic._on_vector_remove))
        for element in series:
            self._hook_element(element)

    def _unhook(self) -> None:
        series = self._series
        if series is None:
            return
        series.post_insert_cb.remove(self)
        series.pre_erase_cb.remove(self)
        for element in series:
            self._unhook_element(element)

    def _hook_element(self, element: ObservableNumber) -> None:
        element.value_cb.install(Observer(self, _SeriesStatistic._on_data_change))
        self._element_added(element)

    def _unhook_element(self, element: ObservableNumber) -> None:
        self._element_removed(element)
        element.value_cb.remove(self)

    def _on_vector_add(self, args: Any) -> int:
        self._hook_element(args[0])
        return 0

    def _on_vector_remove(self, args: Any) -> int:
        self._unhook_element(args[0])
        return 0

    def _on_data_change(self, args: Any) -> int:
        self._data_changed(float(args[0]), float(args[1]))
        return 0

    def _size(self) -> int:
        return len(self._series) if self._series is not None else 0

    def _reset_sums(self) -> None:
        raise NotImplementedError

    def _element_added(self, element: ObservableNumber) -> None:
        raise NotImplementedError

    def _element_removed(self, element: ObservableNumber) -> None:
        raise NotImplementedError

    def _data_changed(self, new: float, old: float) -> None:
        raise NotImplementedError


class Mean(_SeriesStatistic):
    """Arithmetic mean of a series."""

    def __init__(self, series: NumberSeries | None = None) -> None:
        super().__init__(series)

    def set_data(self, series: NumberSeries) -> None:
        """Follow ``series`` instead of the current one."""
        super().set_data(series)

    def detach(self) -> None:
        """Stop following the current series."""
        super().detach()

    def _reset_sums(self) -> None:
        self._sum = 0.0

    def _element_added(self, element: ObservableNumber) -> None:
        self._sum += float(element)
        self.assign(self._sum / self._size())

    def _element_removed(self, element: ObservableNumber) -> None:
        self._sum -= float(element)
        n = self._size()
        self.assign(0.0 if n <= 1 else self._sum / (n - 1))

    def _data_changed(self, new: float, old: float) -> None:
        self._sum += new - old
        n = self._size()
        self.assign(0.0 if n == 0 else self._sum / n)


class _Dispersion(_SeriesStatistic):
    """Shared bookkeeping of variance-based statistics."""

    def _reset_sums(self) -> None:
        self._meansum = 0.0
        self._varsum = 0.0
        self._mean = 0.0
        self.var = 0.0

    def _calc(self, skip: ObservableNumber | None = None) -> None:
        series = self._series if self._series is not None else ()
        self._varsum = sum(
            (float(x) - self._mean) ** 2 for x in series if x is not skip
        )
        n = self._size()
        self.var = 0.0 if n <= 1 else self._varsum / (n - 1)
        self._publish(self.var)

    def _publish(self, variance: float) -> None:
        raise NotImplementedError

    def _element_added(self, element: ObservableNumber) -> None:
        self._meansum += float(element)
        self._mean = self._meansum / self._size()
        self._calc()

    def _element_removed(self, element: ObservableNumber) -> None:
        self._meansum -= float(element)
        n = self._size()
        self._mean = 0.0 if n <= 1 else self._meansum / (n - 1)
        self._calc(element)

    def _data_changed(self, new: float, old: float) -> None:
        self._meansum += new - old
        n = self._size()
        self._mean = 0.0 if n == 0 else self._meansum / n
        self._calc()


class Variance(_Dispersion):
    """Sample variance of a series."""

    def __init__(self, series: NumberSeries | None = None) -> None:
        super().__init__(series)

    def set_data(self, series: NumberSeries) -> None:
        """Follow ``series`` instead of the current one."""
        super().set_data(series)

    def detach(self) -> None:
        """Stop following the current series."""
        super().detach()

    def _publish(self, variance: float) -> None:
        self.assign(variance)


class StdDev(_Dispersion):
    """Sample standard deviation of a series."""

    def __init__(self, series: NumberSeries | None = None) -> None:
        super().__init__(series)

    def set_data(self, series: NumberSeries) -> None:
        """Follow ``series`` instead of the current one."""
        super().set_data(series)

    def detach(self) -> None:
        """Stop following the current series."""
        super().detach()

    def _publish(self, variance: float) -> None:
        self.assign(math.sqrt(variance))