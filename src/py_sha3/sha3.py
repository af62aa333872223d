# Copyright (c) 2023-2024, Andrey Dubovik <andrei@dubovik.eu>

"""A streaming SHA3 and Keccak hash on top of the Keccak sponge."""

# Load standard packages
from typing import Any

# Load local packages
from .keccak import Lanes, absorb_block, lanes_to_bytes, zero_state

# Define sponge parameters, the rate in bytes is (1600 - 2*bits)/8
RATES = {224: 144, 256: 136, 384: 104, 512: 72}
KECCAK_PAD = 0x01
SHA3_PAD = 0x06
LAST_BIT = 0x80

# Algorithm names: (digest bit length, use Keccak padding)
ALGORITHMS = {
    'sha3224': (224, False),
    'sha3224managed': (224, False),
    'sha3': (256, False),
    'sha3256': (256, False),
    'sha3256managed': (256, False),
    'sha3384': (384, False),
    'sha3384managed': (384, False),
    'sha3512': (512, False),
    'sha3512managed': (512, False),
    'keccak224': (224, True),
    'keccak': (256, True),
    'keccak256': (256, True),
    'keccak384': (384, True),
    'keccak512': (512, True),
}


class HashFinalized(RuntimeError):
    """The digest has already been produced, the hash needs a reset."""


class SHA3:
    """A SHA3 (or original Keccak) hash fed incrementally.

    Input is staged in a buffer of `rate` bytes. Each time the buffer fills
    it is XORed into the sponge state, which is then permuted. Whole blocks
    are absorbed straight from the input. After `finalize()` the instance
    refuses further input until `initialize()` is called.
    """

    bits: int
    rate: int
    digest_size: int
    use_keccak_padding: bool
    verbose: bool
    state: Lanes
    buffer: bytearray
    fill: int
    finalized: bool
    absorbed: int
    blocks: int

    def __init__(
            self,
            bits: int = 256,
            use_keccak_padding: bool = False,
            verbose: bool = False,
        ) -> None:
        """Fix the digest length, the rate follows from it."""
        if bits not in RATES:
            raise ValueError('bits must be 224, 256, 384, or 512')
        self.bits = bits
        self.rate = RATES[bits]
        self.digest_size = bits//8
        self.use_keccak_padding = use_keccak_padding
        self.verbose = verbose
        self.initialize()

    @property
    def block_size(self) -> int:
        return self.rate

    @property
    def name(self) -> str:
        prefix = 'keccak' if self.use_keccak_padding else 'sha3'
        return f'{prefix}_{self.bits}'

    def initialize(self) -> None:
        """Zero the state and the staging buffer."""
        if self.verbose:
            print(f'Initializing {self.name} (rate {self.rate} bytes)')
        self.state = zero_state()
        self.buffer = bytearray(self.rate)
        self.fill = 0
        self.finalized = False
        self.absorbed = 0
        self.blocks = 0

    def reset(self) -> None:
        self.initialize()

    def absorb(self, data: Any, offset: int = 0, length: None | int = None) -> None:
        """Absorb length bytes of data starting at offset."""
        if offset < 0:
            raise ValueError('Negative offsets are not supported')
        view = memoryview(data).cast('B')
        if length is None:
            length = max(len(view) - offset, 0)
        if length < 0:
            raise ValueError('Negative lengths are not supported')
        if offset + length > len(view):
            raise ValueError('Offset and length exceed the data size')
        if self.finalized:
            raise HashFinalized('Call initialize() before absorbing more data')
        if length == 0:
            return
        if self.fill == self.rate:
            raise RuntimeError('Unexpected error, the internal buffer is full')

        view = view[offset:offset + length]
        self.absorbed += length

        # Top up the staging buffer
        amount = min(length, self.rate - self.fill)
        self.buffer[self.fill:self.fill + amount] = view[:amount]
        self.fill += amount
        if self.fill == self.rate:
            self.process_block(self.buffer)
            self.fill = 0

        # Whole blocks bypass the staging buffer
        pos = amount
        while length - pos >= self.rate:
            self.process_block(view[pos:pos + self.rate])
            pos += self.rate

        if pos < length:
            self.buffer[:length - pos] = view[pos:]
            self.fill = length - pos

    def update(self, data: Any) -> None:
        """Absorb all of data."""
        self.absorb(data)

    def process_block(self, block: Any) -> None:
        self.blocks += 1
        if self.verbose:
            print(f'Absorbing block {self.blocks} of {self.name}')
        absorb_block(self.state, block, self.rate//8)

    def finalize(self) -> bytes:
        """Pad the last block, permute, and return the digest."""
        if self.finalized:
            raise HashFinalized('Call initialize() before finalizing again')
        if self.verbose:
            print(f'Finalizing {self.name} after {self.absorbed} bytes')
        self.buffer[self.fill:] = bytes(self.rate - self.fill)
        self.buffer[self.fill] = KECCAK_PAD if self.use_keccak_padding else SHA3_PAD
        self.buffer[-1] |= LAST_BIT
        self.process_block(self.buffer)
        self.fill = 0
        self.finalized = True
        return lanes_to_bytes(self.state, self.digest_size)

    def copy(self) -> 'SHA3':
        """Make a clone with own state."""
        h = type(self).__new__(type(self))
        h.bits = self.bits
        h.rate = self.rate
        h.digest_size = self.digest_size
        h.use_keccak_padding = self.use_keccak_padding
        h.verbose = self.verbose
        h.state = self.state.copy()
        h.buffer = self.buffer.copy()
        h.fill = self.fill
        h.finalized = self.finalized
        h.absorbed = self.absorbed
        h.blocks = self.blocks
        return h

    def digest(self) -> bytes:
        """Compute the digest so far, leaving this instance open for input."""
        return self.copy().finalize()

    def hexdigest(self) -> str:
        return self.digest().hex()

    def __repr__(self) -> str:
        return '%s(bits=%i, use_keccak_padding=%s, fill=%i, finalized=%s)' % (
            type(self).__name__,
            self.bits,
            self.use_keccak_padding,
            self.fill,
            self.finalized,
        )


def create(name: str = 'sha3-256', verbose: bool = False) -> SHA3:
    """Resolve an algorithm name such as 'SHA3-384' or 'keccak_256'."""
    key = name.lower().replace('-', '').replace('_', '')
    if key not in ALGORITHMS:
        raise ValueError(f'Unknown hash algorithm: {name}')
    bits, use_keccak_padding = ALGORITHMS[key]
    return SHA3(bits, use_keccak_padding, verbose)


def sha3_224() -> SHA3:
    return SHA3(224)


def sha3_256() -> SHA3:
    return SHA3(256)


def sha3_384() -> SHA3:
    return SHA3(384)


def sha3_512() -> SHA3:
    return SHA3(512)


def keccak_224() -> SHA3:
    return SHA3(224, use_keccak_padding=True)


def keccak_256() -> SHA3:
    return SHA3(256, use_keccak_padding=True)


def keccak_384() -> SHA3:
    return SHA3(384, use_keccak_padding=True)


def keccak_512() -> SHA3:
    return SHA3(512, use_keccak_padding=True)


def sha3(msg: bytes, bits: int = 256) -> bytes:
    """Compute a SHA3 message digest."""
    h = SHA3(bits)
    h.absorb(msg)
    return h.finalize()


def keccak(msg: bytes, bits: int = 256) -> bytes:
    """Compute an original (pre-standard) Keccak message digest."""
    h = SHA3(bits, use_keccak_padding=True)
    h.absorb(msg)
    return h.finalize()
