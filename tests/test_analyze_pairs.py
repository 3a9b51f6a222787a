import json

import matplotlib
matplotlib.use("Agg")

import pytest

from analyze_pairs import PairsAnalyzer, main
from goldbach_pairs import GoldbachEnumerator
from prime_store import PrimeStore


@pytest.fixture
def pairs_file(tmp_path):
    path = tmp_path / "pairs.csv"
    GoldbachEnumerator(PrimeStore(), str(path)).enumerate_up_to(2000)
    return path


def test_partition_counts(pairs_file):
    analyzer = PairsAnalyzer(str(pairs_file), verbose=False)
    counts = dict(zip(analyzer.df['even'], analyzer.df['count']))
    assert counts[4] == 1
    assert counts[10] == 2
    assert counts[100] == 6
    assert len(counts) == 999


def test_malformed_rows_are_dropped(tmp_path):
    path = tmp_path / "pairs.csv"
    path.write_text("4,2,2\nnot,a,row\n6,3,3\n8,3\n")
    analyzer = PairsAnalyzer(str(path), verbose=False)
    assert list(analyzer.pairs['even']) == [4, 6]


def test_empty_file(tmp_path):
    path = tmp_path / "pairs.csv"
    path.write_text("")
    analyzer = PairsAnalyzer(str(path), verbose=False)
    assert len(analyzer.df) == 0
    with pytest.raises(ValueError):
        analyzer.fit_growth_model()


def test_growth_model_has_positive_slope(pairs_file):
    analyzer = PairsAnalyzer(str(pairs_file), verbose=False)
    model = analyzer.fit_growth_model()
    assert model['params'][0] > 0
    assert 0 < model['r_squared'] <= 1


def test_minimal_counts(pairs_file):
    analyzer = PairsAnalyzer(str(pairs_file), verbose=False)
    minimal = analyzer.find_minimal_counts(max_count=3)
    # 12 is the largest even number with a single decomposition
    assert minimal[1]['last_even'] == 12
    assert minimal[1]['occurrences'] == 4


def test_validate_flags_bad_rows(tmp_path):
    path = tmp_path / "pairs.csv"
    path.write_text("4,2,2\n10,3,7\n10,1,9\n12,7,5\n")
    analyzer = PairsAnalyzer(str(path), verbose=False)
    violations = analyzer.validate()
    assert list(zip(violations['even'], violations['p'])) == [(10, 1), (12, 7)]


def test_validate_accepts_generated_pairs(pairs_file):
    assert PairsAnalyzer(str(pairs_file), verbose=False).validate().empty


def test_main_exports(pairs_file, tmp_path):
    prefix = str(tmp_path / "out")
    main([str(pairs_file), "--output-prefix", prefix, "--quiet"])
    with open(f"{prefix}_summary.json") as f:
        summary = json.load(f)
    assert summary['model']['parameters']['c'] > 0
    assert summary['minimal_counts']['1']['last_even'] == 12
    assert (tmp_path / "out_counts.csv").exists()
    assert (tmp_path / "out_comet.png").exists()


def test_main_on_small_run_skips_the_fit(tmp_path, capsys):
    import Goldbach_Sieve
    Goldbach_Sieve.main(["6", str(tmp_path), "--quiet"])
    prefix = str(tmp_path / "small")
    main([str(tmp_path / "pairs.csv"), "--output-prefix", prefix, "--no-plots"])

    assert "Skipping growth model" in capsys.readouterr().out
    with open(f"{prefix}_summary.json") as f:
        summary = json.load(f)
    assert 'model' not in summary
    assert summary['minimal_counts']['1'] == {'last_even': 6, 'occurrences': 2}
    assert (tmp_path / "small_counts.csv").exists()
