import json

import pytest

from mlg_convert.batch import convert_files, output_path


def test_csv_and_json_outputs(sample_file):
    (csv_res,) = convert_files([sample_file], "csv")
    (json_res,) = convert_files([sample_file], "json")

    assert csv_res.ok and csv_res.output == sample_file.with_suffix(".csv")
    assert json_res.ok and json_res.output == sample_file.with_suffix(".json")
    assert csv_res.output.read_text(encoding="utf-8").count("\n") == 4
    assert len(json.loads(json_res.output.read_text(encoding="utf-8"))["dataBlocks"]) == 3


def test_output_path_replaces_extension(tmp_path):
    assert output_path(tmp_path / "run.1.mlg", "json") == tmp_path / "run.1.json"


def test_failure_is_reported_and_batch_continues(tmp_path, sample_file):
    bad = tmp_path / "bad.mlg"
    bad.write_bytes(b"NOTMLG" + bytes(40))

    results = convert_files([bad, sample_file], "csv")

    assert [r.ok for r in results] == [False, True]
    assert results[0].error.startswith("E_UNSUPPORTED_FORMAT")
    assert not bad.with_suffix(".csv").exists()


def test_fail_fast_stops_batch(tmp_path, sample_file):
    bad = tmp_path / "bad.mlg"
    bad.write_bytes(b"")

    results = convert_files([bad, sample_file], "json", fail_fast=True)

    assert len(results) == 1
    assert results[0].error.startswith("E_UNEXPECTED_EOF")
    assert not sample_file.with_suffix(".json").exists()


def test_missing_input(tmp_path):
    (res,) = convert_files([tmp_path / "missing.mlg"], "csv")
    assert res.error.startswith("E_INPUT_READ")


def test_write_failure_is_not_a_decode_error(sample_file):
    sample_file.with_suffix(".json").mkdir()
    (res,) = convert_files([sample_file], "json")
    assert res.error.startswith("E_OUTPUT_WRITE")


def test_unknown_format_rejected_up_front(sample_file):
    with pytest.raises(ValueError, match="Invalid format"):
        convert_files([sample_file], "xml")
