import os
import sys
from datetime import datetime
from pathlib import Path

from wordlist import FatalConfigError, FatalInputError, read_word_list
from wordpack import Compressor_wordpack


class ChurnProgram:
    """Packs and unpacks every file under a directory and logs the round trip."""

    LOG_NAME = "CHURN.LOG"

    def __init__(self):
        self.total_files = 0
        self.total_passed = 0
        self.total_failed = 0
        self.total_skipped = 0
        self.compressor = None
        self.log_file = None

    def main(self, args):
        if len(args) not in (1, 2):
            self.usage_exit()
            return

        root_dir = args[0]
        word_file = args[1] if len(args) == 2 else Compressor_wordpack.DEFAULT_WORD_FILE
        try:
            self.compressor = Compressor_wordpack(read_word_list(word_file))
        except FatalConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        try:
            self.log_file = open(self.LOG_NAME, "w", encoding="utf-8")
            self.write_log_header()

            start_time = datetime.now()
            self.churn_files(root_dir)
            stop_time = datetime.now()

            self.write_log_summary(start_time, stop_time)
        finally:
            if self.log_file:
                self.log_file.close()

    def churn_files(self, path):
        try:
            entries = sorted(os.scandir(path), key=lambda entry: entry.name)
        except PermissionError as ex:
            print(f"Access denied to {path}: {ex}", file=sys.stderr)
            return

        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                self.churn_files(entry.path)
            elif entry.is_file(follow_symlinks=False):
                if not self.file_is_already_compressed(entry.path):
                    print(f"Testing {entry.path}", file=sys.stderr)
                    if not self.compress(entry.path):
                        print("Comparison failed!", file=sys.stderr)

    def file_is_already_compressed(self, name):
        compressed_extensions = {".raw", ".zip", ".gz", ".lzh", ".arc", ".gif", ".pak", ".arj"}
        extension = Path(name).suffix.lower()
        return extension in compressed_extensions or Path(name).name == self.LOG_NAME

    def compress(self, file_name):
        """Returns False only when the round trip didn't reproduce the file."""
        self.log_file.write(f"{file_name:<40} ")
        with open(file_name, "rb") as f:
            original = f.read()

        try:
            packed = self.compressor.compress_bytes(original)
        except FatalInputError as ex:
            self.total_skipped += 1
            self.log_file.write(f"Skipped: {ex}\n")
            return True

        unpacked = self.compressor.expand_bytes(packed)
        self.total_files += 1

        old_size = len(original)
        new_size = len(packed)
        self.log_file.write(f" {old_size:8} {new_size:8} ")
        if old_size == 0:
            old_size = 1
        ratio = 100 - (new_size * 100 // old_size)
        self.log_file.write(f"{ratio:4}%  ")

        if unpacked != original:
            self.log_file.write("Failed\n")
            self.total_failed += 1
            return False

        self.log_file.write("Passed\n")
        self.total_passed += 1
        return True

    def write_log_header(self):
        self.log_file.write("                                          Original   Packed\n")
        self.log_file.write("            File Name                     Size      Size   Ratio  Result\n")
        self.log_file.write("-------------------------------------     --------  --------  ----  ------\n")

    def write_log_summary(self, start_time, stop_time):
        elapsed_time = (stop_time - start_time).total_seconds()
        self.log_file.write(f"\nTotal elapsed time: {elapsed_time:.2f} seconds\n")
        self.log_file.write(f"Total files:   {self.total_files}\n")
        self.log_file.write(f"Total passed:  {self.total_passed}\n")
        self.log_file.write(f"Total failed:  {self.total_failed}\n")
        self.log_file.write(f"Total skipped: {self.total_skipped}\n")

    def usage_exit(self):
        usage = """
CHURN 1.0. Usage: CHURN root-dir [word-file]

CHURN tests the word list packer by packing and unpacking all files in a
directory tree in memory.  Files holding characters the packer can't
represent are skipped.

Example:
  CHURN samples words.txt
"""
        print(usage)
        sys.exit(1)


if __name__ == "__main__":
    churn = ChurnProgram()
    churn.main(sys.argv[1:])
