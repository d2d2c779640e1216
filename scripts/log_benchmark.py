import sys
import os
import tempfile
import time

# Ensure we can import the package without installing it
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

from debuglog import LogSink, SinkSettings

ITERATIONS = 10_000


def bench(name, fn):
    start = time.perf_counter()
    for _ in range(ITERATIONS):
        fn()
    elapsed = time.perf_counter() - start
    print(f"{name:<24} {elapsed / ITERATIONS * 1e6:8.2f} us/op")


def main():
    with tempfile.TemporaryDirectory() as root:
        settings = SinkSettings(root_path=root, console=False)
        with LogSink(settings) as sink:
            msg = "Test message"
            bench("log_string", lambda: sink.log(msg))
            bench("log_integer", lambda: sink.log(42))
            bench("log_formatted", lambda: sink.log("Value: {}", 42))
            bench("log_warning_string", lambda: sink.log_warning("Warning message"))
            bench("log_error_string", lambda: sink.log_error("Error message"))


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print(f"Benchmark failed: {e}")
        sys.exit(1)
