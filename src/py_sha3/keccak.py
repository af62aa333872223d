# Copyright (c) 2023-2024, Andrey Dubovik <andrei@dubovik.eu>

"""A NumPy-based implementation of the Keccak-f[1600] permutation."""

import numpy as np
import numpy.typing as ntp

# Define Keccak-f[1600] constants
LANES = 25
ROUNDS = 24
LANE = np.dtype('<u8')

# Define types
Lanes = ntp.NDArray[np.uint64]


def table(values: list[int], dtype: np.dtype = LANE) -> np.ndarray:
    """Freeze a lookup table."""
    a = np.array(values, dtype=dtype)
    a.flags.writeable = False
    return a


ROUND_CONSTANTS = table([
    0x0000000000000001, 0x0000000000008082, 0x800000000000808a,
    0x8000000080008000, 0x000000000000808b, 0x0000000080000001,
    0x8000000080008081, 0x8000000000008009, 0x000000000000008a,
    0x0000000000000088, 0x0000000080008009, 0x000000008000000a,
    0x000000008000808b, 0x800000000000008b, 0x8000000000008089,
    0x8000000000008003, 0x8000000000008002, 0x8000000000000080,
    0x000000000000800a, 0x800000008000000a, 0x8000000080008081,
    0x8000000000008080, 0x0000000080000001, 0x8000000080008008,
])

# Lane (x, y) is stored at index x + 5*y, so a reshape to (5, 5) gives [y, x]
ROTATION_OFFSETS = table([
     0,  1, 62, 28, 27,
    36, 44,  6, 55, 20,
     3, 10, 43, 25, 39,
    41, 45, 15, 21,  8,
    18,  2, 61, 56, 14,
])

# new[x, y] = old[(x + 3*y)%5, x]
PI_INDEX = table([
    0, 6, 12, 18, 24,
    3, 9, 10, 16, 22,
    1, 7, 13, 19, 20,
    4, 5, 11, 17, 23,
    2, 8, 14, 15, 21,
], dtype=np.intp)

X_MINUS = table([4, 0, 1, 2, 3], dtype=np.intp)
X_PLUS = table([1, 2, 3, 4, 0], dtype=np.intp)
X_PLUS2 = table([2, 3, 4, 0, 1], dtype=np.intp)


def zero_state() -> Lanes:
    """Allocate an all-zero sponge state."""
    return np.zeros(LANES, dtype=LANE)


def rol(a: Lanes, n: int | Lanes) -> Lanes:
    """Rotate 64-bit lanes to the left."""
    n = np.asarray(n, dtype=LANE)%64
    return (a << n) | (a >> (64 - n)%64)


def theta(a: Lanes) -> Lanes:
    m = a.reshape(5, 5)
    c = np.bitwise_xor.reduce(m, axis=0)
    d = c[X_MINUS] ^ rol(c[X_PLUS], 1)
    return (m ^ d).reshape(-1)


def rho(a: Lanes) -> Lanes:
    return rol(a, ROTATION_OFFSETS)


def pi(a: Lanes) -> Lanes:
    return a[PI_INDEX]


def chi(a: Lanes) -> Lanes:
    m = a.reshape(5, 5)
    return (m ^ (~m[:,X_PLUS] & m[:,X_PLUS2])).reshape(-1)


def iota(a: Lanes, i: int) -> Lanes:
    a = a.copy()
    a[0] ^= ROUND_CONSTANTS[i]
    return a


def keccak_f(state: Lanes) -> None:
    """Compute a Keccak permutation in place."""
    a = state
    for i in range(ROUNDS):
        a = iota(chi(pi(rho(theta(a)))), i)
    state[:] = a


def absorb_block(state: Lanes, block: bytes, lane_count: int) -> None:
    """XOR a block into the leading lanes, then permute the whole state.

    The block must hold exactly 8*lane_count bytes, which are read as
    little-endian 64-bit words. No checks are made.
    """
    state[:lane_count] ^= np.frombuffer(block, dtype=LANE, count=lane_count)
    keccak_f(state)


def lanes_to_bytes(state: Lanes, length: int) -> bytes:
    """Serialize the leading bytes of the state, lanes in little-endian."""
    return state.astype(LANE, copy=False).tobytes()[:length]
