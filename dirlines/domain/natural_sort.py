from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable


def _is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _digit_run_end(value: str, start: int) -> int:
    end = start
    while end < len(value) and _is_ascii_digit(value[end]):
        end += 1
    return end


def _compare_digit_runs(left: str, right: str) -> int:
    """
    Назначение:
        Сравнивает две серии цифр по числовому значению без перевода в int.

    Алгоритм:
        - Отбросить ведущие нули.
        - Более длинная серия больше; при равной длине решает посимвольное сравнение.
    """
    left = left.lstrip("0")
    right = right.lstrip("0")
    if len(left) != len(right):
        return -1 if len(left) < len(right) else 1
    if left != right:
        return -1 if left < right else 1
    return 0


def compare_names(left: str, right: str) -> int:
    """
    Назначение:
        Натуральное сравнение имён файлов: messages.2 < messages.10.

    Входные данные:
        left: str
        right: str

    Выходные данные:
        int
            -1, 0 или 1.

    Алгоритм:
        - Оба текущих символа ASCII-цифры: берём максимальные серии цифр и сравниваем
          их как числа; при равенстве продолжаем сразу после серий ("007" == "7").
        - Иначе сравниваем символы по code point.
        - Строка, закончившаяся раньше, меньше.
    """
    i = 0
    j = 0
    while i < len(left) and j < len(right):
        lc = left[i]
        rc = right[j]
        if _is_ascii_digit(lc) and _is_ascii_digit(rc):
            i_end = _digit_run_end(left, i)
            j_end = _digit_run_end(right, j)
            result = _compare_digit_runs(left[i:i_end], right[j:j_end])
            if result != 0:
                return result
            i = i_end
            j = j_end
            continue
        if lc != rc:
            return -1 if lc < rc else 1
        i += 1
        j += 1

    if i < len(left):
        return 1
    if j < len(right):
        return -1
    return 0


natural_sort_key = cmp_to_key(compare_names)


def _compare_for_listing(left: str, right: str) -> int:
    # names equal up to leading zeros: shorter first, then plain code point order
    result = compare_names(left, right)
    if result != 0:
        return result
    if len(left) != len(right):
        return -1 if len(left) < len(right) else 1
    if left != right:
        return -1 if left < right else 1
    return 0


def sort_names(names: Iterable[str]) -> list[str]:
    """
    Назначение:
        Сортирует имена натурально с детерминированным разрешением ничьих.
    """
    return sorted(names, key=cmp_to_key(_compare_for_listing))


__all__ = ["compare_names", "natural_sort_key", "sort_names"]
