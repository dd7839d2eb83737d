# Bradford Arrington 2025
import sys
import os
import time
import tracemalloc
import psutil

from bitio import CompressorBitio
from wordlist import FatalConfigError
from wordpack import Compressor_wordpack

_printed_header = False

compdecomp = Compressor_wordpack()


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


def remove_output(output_name: str):
    # No partial output: drop whatever was written.
    if os.path.exists(output_name):
        os.remove(output_name)


def main(arguments):
    if len(arguments) < 3:
        short_name = os.path.splitext(os.path.basename(arguments[0]))[0]
        print(f"\nUsage:  {short_name} {Compressor_wordpack.USAGE}")
        sys.exit(0)

    input_name = arguments[1]
    output_name = arguments[2]
    remaining_args = arguments[3:]

    try:
        input_file = CompressorBitio.BitFile.open_input_bit_file(input_name)
    except OSError:
        print(f"Can't open file: {input_name}", file=sys.stderr)
        sys.exit(1)

    try:
        with input_file, open(output_name, 'wb') as output_file:
            print(f"\nDecompressing {input_name} to {output_name}")
            print(f"Using {compdecomp.COMPRESSION_NAME}\n")
            track_performance("ExpandFile", compdecomp.expand_file, input_file, output_file, len(remaining_args), remaining_args)
    except FatalConfigError as e:
        remove_output(output_name)
        print(e, file=sys.stderr)
        sys.exit(1)
    except IndexError as e:
        remove_output(output_name)
        print(f"Corrupt packed file: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"An error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main(sys.argv)
