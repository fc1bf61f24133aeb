"""Tests for CLI functionality"""

import subprocess
import sys

import pytest

SAMPLE_ARPA = """\\data\\
ngram 1=3
ngram 2=2
ngram 3=1

\\1-grams:
-1.0 <s> -0.5
-0.5 hello -0.3
-0.7 </s>

\\2-grams:
-0.2 <s> hello -0.1
-0.4 hello </s>

\\3-grams:
-0.05 <s> hello </s>

\\end\\
"""


def run_cli(*args, input=None):
    return subprocess.run(
        [sys.executable, "-m", "arpareader.cli", *args],
        capture_output=True,
        text=True,
        input=input,
    )


class TestCLI:
    """Test command-line interface"""

    @pytest.fixture
    def model_path(self, tmp_path):
        path = tmp_path / "model.arpa"
        path.write_text(SAMPLE_ARPA)
        return str(path)

    def test_help(self):
        result = run_cli("--help")
        assert result.returncode == 0
        assert "ARPA language model" in result.stdout

    def test_statistics(self, model_path):
        result = run_cli(model_path)

        assert result.returncode == 0
        assert "Model Statistics" in result.stdout
        assert "Order:      3" in result.stdout
        # three words plus <unk>
        assert "Vocabulary: 4 words" in result.stdout
        assert "3-grams:" in result.stdout
        assert result.stderr == ""

    def test_max_order(self, model_path):
        result = run_cli(model_path, "-m", "2")

        assert result.returncode == 0
        assert "Order:      2" in result.stdout
        assert "3-grams:" not in result.stdout

    def test_truncated_output(self, model_path, tmp_path):
        out_path = tmp_path / "small.arpa"
        result = run_cli(model_path, "-m", "2", "-o", str(out_path))

        assert result.returncode == 0
        content = out_path.read_text()
        assert "ngram 2=2" in content
        assert "\\3-grams:" not in content
        assert content.endswith("\\end\\\n")

    def test_vocab_output(self, model_path, tmp_path):
        vocab_path = tmp_path / "words.txt"
        result = run_cli(model_path, "--vocab", str(vocab_path))

        assert result.returncode == 0
        assert vocab_path.read_text().split() == ["<s>", "hello", "</s>", "<unk>"]

    def test_stdin(self):
        result = run_cli("-", input=SAMPLE_ARPA)
        assert result.returncode == 0
        assert "Order:      3" in result.stdout

    def test_verbose(self, model_path):
        result = run_cli(model_path, "-v")
        assert result.returncode == 0
        assert "Reading 1-grams" in result.stderr

    def test_missing_file(self, tmp_path):
        result = run_cli(str(tmp_path / "missing.arpa"))
        assert result.returncode == 1
        assert "Error:" in result.stderr

    def test_bad_entry(self, tmp_path):
        path = tmp_path / "bad.arpa"
        path.write_text(SAMPLE_ARPA.replace("-0.5 hello -0.3", "0.5 hello -0.3"))

        result = run_cli(str(path))
        assert result.returncode == 1
        assert "line 8" in result.stderr

    def test_no_partial_output_on_error(self, tmp_path):
        path = tmp_path / "bad.arpa"
        path.write_text(SAMPLE_ARPA.replace("-0.4 hello </s>", "0.4 hello </s>"))
        out_path = tmp_path / "out.arpa"

        result = run_cli(str(path), "-o", str(out_path))

        assert result.returncode == 1
        assert not out_path.exists()
        assert sorted(p.name for p in tmp_path.iterdir()) == ["bad.arpa"]

    def test_failed_run_keeps_previous_output(self, tmp_path):
        out_path = tmp_path / "out.arpa"
        out_path.write_text("previous model\n")

        result = run_cli(str(tmp_path / "missing.arpa"), "-o", str(out_path))

        assert result.returncode == 1
        assert out_path.read_text() == "previous model\n"

    def test_invalid_max_order(self, model_path):
        result = run_cli(model_path, "-m", "0")
        assert result.returncode == 2
