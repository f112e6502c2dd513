'''
 utilidades numéricas (rangos de 32 bits, bytes big-endian, formatos)
'''

from __future__ import annotations
from typing import Iterable

# Máscara para 32 bits sin signo
U32_MASK = 0xFFFFFFFF
I32_MIN = -(1 << 31)
I32_MAX = (1 << 31) - 1

def is_u32(x: int) -> bool:
    """Devuelve True si x está en [0, 2^32)."""
    return 0 <= x <= U32_MASK

def is_i32(x: int) -> bool:
    """Devuelve True si x está en [-(2^31), 2^31-1]."""
    return I32_MIN <= x <= I32_MAX

def u32_be(x: int) -> bytes:
    """4 bytes big-endian de un entero sin signo de 32 bits."""
    if not is_u32(x):
        raise ValueError(f"fuera de rango u32: {x}")
    return x.to_bytes(4, "big")

def i32_be(x: int) -> bytes:
    """4 bytes big-endian (complemento a dos) de un entero con signo de 32 bits."""
    if not is_i32(x):
        raise ValueError(f"fuera de rango i32: {x}")
    return x.to_bytes(4, "big", signed=True)

def hex_bytes(data: Iterable[int]) -> str:
    """Bytes como pares hexadecimales separados por espacio: '01 00 0f'."""
    return " ".join(format(b, "02x") for b in data)
