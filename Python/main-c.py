# Bradford Arrington 2025
import sys
import os
import time
import tracemalloc
import psutil

from bitio import CompressorBitio
from wordlist import FatalConfigError, FatalInputError
from wordpack import Compressor_wordpack

_printed_header = False

compdecomp = Compressor_wordpack()


def file_size(file_name: str) -> int:
    try:
        file_info = os.stat(file_name)
        return file_info.st_size
    except FileNotFoundError:
        return 0


def print_ratios(input_file_path: str, output_file_path: str):
    input_size = file_size(input_file_path)
    if input_size == 0:
        input_size = 1

    output_size = file_size(output_file_path)
    ratio = 100 - int((output_size * 100) / input_size)

    print(f"\nInput bytes:             {input_size}")
    print(f"Output bytes:            {output_size}")
    print(f"Compression ratio:       {ratio}%")


def track_performance(name, func, *args, **kwargs):
    global _printed_header

    process = psutil.Process(os.getpid())
    start_time = time.time()
    start_cpu = process.cpu_times().user
    tracemalloc.start()
    start_mem = tracemalloc.get_traced_memory()[0]

    try:
        result = func(*args, **kwargs)
    finally:
        end_mem = tracemalloc.get_traced_memory()[1]
        tracemalloc.stop()
    end_cpu = process.cpu_times().user
    end_time = time.time()

    wall_time_ms = (end_time - start_time) * 1000
    cpu_time_ms = (end_cpu - start_cpu) * 1000
    mem_used_kb = (end_mem - start_mem) / 1024

    if not _printed_header:
        print(f"{'Function':<20} {'Wall Time (ms)':>15} {'CPU Time (ms)':>15} {'Memory Used (KB)':>20}")
        _printed_header = True

    print(f"{name:<20} {wall_time_ms:15.2f} {cpu_time_ms:15.2f} {mem_used_kb:20.2f}")

    return result


def usage_exit(prog_name: str):
    short_name = os.path.splitext(os.path.basename(prog_name))[0]
    print(f"\nUsage:  {short_name} {Compressor_wordpack.USAGE}")
    sys.exit(0)


def main(arguments):
    if len(arguments) < 3:
        usage_exit(arguments[0])

    input_name = arguments[1]
    output_name = arguments[2]
    remaining_args = arguments[3:]

    try:
        input_file = open(input_name, 'rb')
    except OSError:
        print(f"Can't open file: {input_name}", file=sys.stderr)
        sys.exit(1)

    output = None
    try:
        with input_file:
            output = track_performance("OpenBitFile", CompressorBitio.BitFile.open_output_bit_file, output_name)
            track_performance("CompressFile", compdecomp.compress_file, input_file, output, len(remaining_args), remaining_args)
            track_performance("CloseBitFile", output.close_bit_file)
            output = None
    except (FatalConfigError, FatalInputError, OSError) as e:
        # No partial output: drop whatever was created.
        if output is not None:
            output.file_stream.close()
            os.remove(output_name)
        print(f"An error occurred: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"\nCompressing {input_name} to {output_name}")
    print(f"Using {compdecomp.COMPRESSION_NAME}\n")
    print_ratios(input_name, output_name)


if __name__ == '__main__':
    main(sys.argv)
