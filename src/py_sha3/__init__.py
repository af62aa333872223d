# Copyright (c) 2023-2024, Andrey Dubovik <andrei@dubovik.eu>

"""Streaming SHA3 and Keccak hashes on a NumPy Keccak-f[1600] permutation."""

from .sha3 import (
    SHA3, HashFinalized, create, keccak, sha3,
    keccak_224, keccak_256, keccak_384, keccak_512,
    sha3_224, sha3_256, sha3_384, sha3_512,
)

__all__ = [
    'SHA3', 'HashFinalized', 'create', 'keccak', 'sha3',
    'keccak_224', 'keccak_256', 'keccak_384', 'keccak_512',
    'sha3_224', 'sha3_256', 'sha3_384', 'sha3_512',
]
