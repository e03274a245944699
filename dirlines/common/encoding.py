from __future__ import annotations

import codecs


def checkLineEncoding(value: str) -> str:
    """
    Назначение:
        Проверяет, что кодировка пригодна для разбиения строк по байту b"\\n".

    Поведение:
        - Неизвестная кодировка: ValueError.
        - "\\n" должен кодироваться в один байт b"\\n" (BOM utf-8-sig допускается),
          иначе UTF-16/32 резались бы посреди code unit: ValueError.
    """
    try:
        codecs.lookup(value)
        encoded = "\n".encode(value)
    except LookupError as exc:
        raise ValueError(f"Unknown encoding: {value}") from exc
    if encoded.removeprefix(codecs.BOM_UTF8) != b"\n":
        raise ValueError(f"Encoding is not ASCII-compatible, lines cannot be split: {value}")
    return value
