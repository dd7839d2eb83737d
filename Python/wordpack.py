#Bradford Arrington 2025
import io
from io import FileIO
from typing import List, Optional

from bitio import CompressorBitio, END_OF_STREAM
from wordlist import WordList, FatalInputError, read_word_list, valid_char


class Compressor_wordpack:
    COMPRESSION_NAME = "Word List 9 Bit Encoder"
    USAGE = "in-file out-file [word-file] [-d]\n\n"
    DEFAULT_WORD_FILE = "words.txt"
    DEBUG_FLAG = "-d"

    def __init__(self, word_list: Optional[WordList] = None, debug: bool = False):
        self.word_list = word_list
        self.debug = debug

    def load_word_list(self, argc: int, argv: List[str]) -> WordList:
        """
        The first extra argument names the word file, "-d" turns on the
        debug trace.  Anything else is reported and ignored.
        """
        word_file = None
        for arg in argv[:argc]:
            if arg == self.DEBUG_FLAG:
                self.debug = True
            elif word_file is None:
                word_file = arg
            else:
                print(f"Unknown argument: {arg}")

        if self.word_list is None:
            self.word_list = read_word_list(word_file or self.DEFAULT_WORD_FILE)
            if self.debug:
                self.word_list.dump()
        return self.word_list

    @staticmethod
    def read_file(input_stream: FileIO) -> bytes:
        """Read the whole input, refusing any byte outside the valid characters."""
        buffer = input_stream.read()
        for pos, ch in enumerate(buffer):
            if not valid_char(ch):
                raise FatalInputError(ch, pos)
        return buffer

    def compress_file(self, input_stream: FileIO, output: 'CompressorBitio.BitFile', argc: int, argv: List[str]) -> int:
        word_list = self.load_word_list(argc, argv)

        # Read the contents of the whole file into one big buffer before
        # writing anything, so bad input leaves no partial output.
        buffer = self.read_file(input_stream)

        pos = 0
        codes = 0
        while pos < len(buffer):
            code = word_list.best_code(buffer, pos)
            word = word_list.word(code)
            if self.debug:
                print(f"{code} <- {word.decode('latin-1')!r}")
            output.output_code(code)
            pos += len(word)
            codes += 1

        # Write out any remaining bits in the last, partial byte.
        output.flush()
        return codes

    def expand_file(self, input_bit_file: 'CompressorBitio.BitFile', output_stream: FileIO, argc: int, argv: List[str]) -> int:
        word_list = self.load_word_list(argc, argv)

        codes = 0
        while True:
            code = input_bit_file.input_code()
            if code == END_OF_STREAM:
                break
            output_stream.write(word_list.word(code))
            codes += 1
        return codes

    def compress_bytes(self, data: bytes) -> bytes:
        output_stream = io.BytesIO()
        with CompressorBitio.BitFile.from_stream(output_stream, False) as output:
            self.compress_file(io.BytesIO(data), output, 0, [])
        return output_stream.getvalue()

    def expand_bytes(self, data: bytes) -> bytes:
        output_stream = io.BytesIO()
        with CompressorBitio.BitFile.from_stream(io.BytesIO(data), True) as input_bit_file:
            self.expand_file(input_bit_file, output_stream, 0, [])
        return output_stream.getvalue()
