import pyperf

from tests.parsers.numbers import loads

DATA = ", ".join(str(n / 7) for n in range(10000))


runner = pyperf.Runner()
runner.bench_func("numbers_parser", lambda: loads(DATA))
