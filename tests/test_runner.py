import pytest

from ambench.coremark.listbench import CoreResults, list_init
from ambench.coremark.matrix import init_matrix
from ambench.coremark.runner import (
    ID_MATRIX,
    LIST_KNOWN_CRC,
    MATRIX_KNOWN_CRC,
    STATE_KNOWN_CRC,
    iterate,
    main,
    run_coremark,
)
from ambench.coremark.state import init_state


@pytest.fixture(scope="module")
def performance_report():
    return run_coremark(0, 0, 0, 1)


def _results(iterations):
    return CoreResults(seed1=0, seed2=0, seed3=0x66, size=666, iterations=iterations,
                       list=list_init(666, 0), mat=init_matrix(666, 0),
                       state=init_state(666, 0))


def test_performance_run_is_recognised(performance_report):
    assert performance_report.seed3 == 0x66
    assert performance_report.size == 666
    assert performance_report.seedcrc == 0xE9F5
    assert performance_report.known_id == 3


def test_performance_run_crcs_match_known_values(performance_report):
    assert performance_report.crclist == LIST_KNOWN_CRC[3]
    assert performance_report.crcmatrix == MATRIX_KNOWN_CRC[3]
    assert performance_report.crcstate == STATE_KNOWN_CRC[3]
    assert performance_report.errors == 0
    assert performance_report.messages == ["2K performance run parameters for coremark."]


def test_validation_seeds_are_substituted():
    report = run_coremark(1, 0, 0, 1)
    assert (report.seed1, report.seed2, report.seed3) == (0x3415, 0x3415, 0x66)
    assert report.seedcrc == 0x18F2
    assert report.known_id == 4
    assert report.crcstate == STATE_KNOWN_CRC[4]
    assert report.errors == 0


def test_unknown_seeds_cannot_be_validated():
    report = run_coremark(5, 5, 5, 1)
    assert report.known_id is None
    assert report.errors == -1
    assert report.marks is None


def test_iterate_produces_known_crcs():
    results = _results(1)
    iterate(results)
    assert results.crclist == 0xE714
    assert results.crcmatrix == 0x1FD7
    assert results.crcstate == 0x8E3A


def test_iterate_restores_list_between_iterations():
    single = _results(1)
    iterate(single)
    double = _results(2)
    iterate(double)
    assert double.crclist == single.crclist
    assert double.crcmatrix == single.crcmatrix


def test_iterate_zero_iterations_resets_crcs():
    results = _results(0)
    results.crc = 5
    results.crclist = 7
    iterate(results)
    assert (results.crc, results.crclist, results.crcmatrix, results.crcstate) == (0, 0, 0, 0)


def test_execs_without_list_is_rejected():
    with pytest.raises(ValueError):
        run_coremark(0, 0, 0x66, 1, ID_MATRIX)


def test_execs_without_known_algorithm_is_rejected():
    with pytest.raises(ValueError):
        run_coremark(0, 0, 0x66, 1, 8)


def test_negative_iterations_rejected():
    with pytest.raises(ValueError):
        run_coremark(0, 0, 0x66, -1)


def test_main_reports_pass(capsys):
    status = main(["0", "0", "0x66", "1"])
    out = capsys.readouterr().out
    assert status == 0
    assert "seedcrc          : 0xe9f5" in out
    assert "[0]crclist       : 0xe714" in out
    assert "CoreMark PASS" in out
    assert "Running CoreMark for 1 iterations" in out