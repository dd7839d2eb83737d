#Bradford Arrington 2025
import sys
from dataclasses import dataclass
from io import FileIO
from typing import BinaryIO

# Number of bits per byte.  This isn't going to change, but it reads better
# than a bare 8 in the shifts below.
BITS_PER_BYTE = 8

# Number of bits in each code written to or read from a packed file.
BITS_PER_CODE = 9

CODE_MASK = (1 << BITS_PER_CODE) - 1
BYTE_MASK = (1 << BITS_PER_BYTE) - 1

# Returned by read_code() when fewer than BITS_PER_CODE bits are left.
END_OF_STREAM = -1


@dataclass
class PendingBits:
    """
    Bits we are not finished with.  While writing, these are bits waiting
    for a full byte; while reading, bits already read that the caller
    doesn't need yet.  Valid bits live in the low-order end of `bits`.
    """
    bits: int = 0
    bit_count: int = 0


def write_code(code: int, pending: PendingBits, stream: BinaryIO) -> int:
    """
    Write the 9 low-order bits of code to stream, low bit first.
    Bits that only partially fill the next byte are left in pending.
    Returns the number of whole bytes written (0, 1 or 2).
    """
    if code < 0 or code > CODE_MASK:
        raise ValueError(f"Code {code} does not fit in {BITS_PER_CODE} bits")

    rack = pending.bits | (code << pending.bit_count)
    count = pending.bit_count + BITS_PER_CODE
    out = bytearray()
    while count >= BITS_PER_BYTE:
        out.append(rack & BYTE_MASK)
        rack >>= BITS_PER_BYTE
        count -= BITS_PER_BYTE

    if out:
        stream.write(bytes(out))
    pending.bits = rack
    pending.bit_count = count
    return len(out)


def flush_bits(pending: PendingBits, stream: BinaryIO) -> int:
    """
    If any bits are buffered in pending, write them out in the low-order
    positions of one byte with zeros above.  Returns the bytes written.
    """
    if pending.bit_count == 0:
        return 0
    stream.write(bytes([pending.bits & BYTE_MASK]))
    pending.bits = 0
    pending.bit_count = 0
    return 1


def read_code(pending: PendingBits, stream: BinaryIO) -> int:
    """
    Read and return the next 9-bit code, using the bits left in pending
    first.  Returns END_OF_STREAM if the stream runs out before 9 bits.
    """
    rack = pending.bits
    count = pending.bit_count
    needed = (BITS_PER_CODE - count + BITS_PER_BYTE - 1) // BITS_PER_BYTE
    data = stream.read(needed)
    if len(data) < needed:
        return END_OF_STREAM

    for byte in data:
        rack |= byte << count
        count += BITS_PER_BYTE

    pending.bits = rack >> BITS_PER_CODE
    pending.bit_count = count - BITS_PER_CODE
    return rack & CODE_MASK


class CompressorBitio:
    PACIFIER_COUNT = 2047

    class BitFile:
        def __init__(self, file_stream: BinaryIO, input_mode: bool, owns_stream: bool = True):
            self.is_input = input_mode
            self.file_stream = file_stream
            self.owns_stream = owns_stream
            self.pending = PendingBits()
            self.pacifier_counter: int = 0
            self.code_count: int = 0

        @staticmethod
        def open_output_bit_file(name: str) -> 'CompressorBitio.BitFile':
            file_stream: FileIO = open(name, "wb")
            return CompressorBitio.BitFile(file_stream, False)

        @staticmethod
        def open_input_bit_file(name: str) -> 'CompressorBitio.BitFile':
            file_stream: FileIO = open(name, "rb")
            return CompressorBitio.BitFile(file_stream, True)

        @staticmethod
        def from_stream(stream: BinaryIO, input_mode: bool) -> 'CompressorBitio.BitFile':
            """Wrap an already open binary stream.  The caller keeps ownership of it."""
            return CompressorBitio.BitFile(stream, input_mode, owns_stream=False)

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_value, traceback):
            self.close_bit_file()
            return False

        def close_bit_file(self):
            try:
                if not self.is_input:
                    self.flush()
            finally:
                if self.owns_stream:
                    self.file_stream.close()

        def pacify(self, byte_count: int):
            for _ in range(byte_count):
                self.pacifier_counter += 1
                if (self.pacifier_counter & CompressorBitio.PACIFIER_COUNT) == 0:
                    sys.stdout.write(".")
                    sys.stdout.flush()

        def output_code(self, code: int):
            try:
                written = write_code(code, self.pending, self.file_stream)
            except IOError as e:
                raise IOError(f"Fatal error in OutputCode! {e}") from e
            self.code_count += 1
            self.pacify(written)

        def flush(self):
            try:
                written = flush_bits(self.pending, self.file_stream)
            except IOError as e:
                raise IOError(f"Fatal error in FlushBits! {e}") from e
            self.pacify(written)

        def input_code(self) -> int:
            before = self.pending.bit_count
            try:
                code = read_code(self.pending, self.file_stream)
            except IOError as e:
                raise IOError(f"Fatal error in InputCode! {e}") from e
            if code != END_OF_STREAM:
                self.code_count += 1
                # two bytes are read when nothing was pending
                self.pacify(2 if before == 0 else 1)
            return code
