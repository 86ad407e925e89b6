import random

from benches import benchmarks
from examples import simple


class TestSimpleExample:
    def test_output(self, capsys) -> None:
        simple.main()
        out = capsys.readouterr().out.splitlines()
        assert out == ["foo: True", "bar: True", "baz: False", "approximate count: 2"]


class TestBenchmarks:
    def test_make_keys(self) -> None:
        keys = benchmarks.make_keys(random.Random(0), 10, 32)
        assert len(keys) == 10
        assert all(len(k) == 32 and k.isalnum() for k in keys)

    def test_bench_rows(self) -> None:
        keys = benchmarks.make_keys(random.Random(0), 100, 8)
        row = benchmarks.bench_check(100, keys, keys)
        assert row["name"] == "check-100"
        assert row["ops"] == 100
        assert row["ops_per_sec"] > 0

    def test_main(self, capsys) -> None:
        code = benchmarks.main(["--capacity", "100", "--queries", "50", "--seed", "1"])
        out = capsys.readouterr().out
        assert code == 0
        assert "insert-100" in out
        assert "check-100" in out
        assert "check-10000" not in out

    def test_report_has_no_debug_logs(self, capsys) -> None:
        """Library debug events stay out of the benchmark report."""
        benchmarks.main(["--capacity", "10", "--queries", "5", "--seed", "1"])
        out = capsys.readouterr().out
        assert "bloom_filter_created" not in out
        assert "[debug" not in out
        assert out.startswith("=" * 64)
