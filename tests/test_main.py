"""
Tests for the command line entry point.
"""

import sys

import pandas as pd
import pytest
from aerosurfaces.airframe import create_default_airframe
from aerosurfaces.main import main, run_force_report, run_polar, run_sanity_checks


@pytest.fixture
def airframe():
    return create_default_airframe()


def test_sanity_checks_pass(airframe):
    assert run_sanity_checks(airframe, verbose=False)


def test_sanity_checks_report(airframe, capsys):
    run_sanity_checks(airframe)
    out = capsys.readouterr().out
    assert "4/4 CHECKS PASSED" in out
    assert "FAIL" not in out


def test_force_report(airframe, capsys):
    run_force_report(airframe, 27.7, 2.0)
    out = capsys.readouterr().out
    for spec in airframe.surfaces:
        assert spec.name in out
    assert "Net force" in out


def test_polar_export(airframe, tmp_path, capsys):
    output = str(tmp_path / "wing.csv")
    run_polar(airframe, "left wing", output_file=output)

    assert "max L/D" in capsys.readouterr().out
    assert len(pd.read_csv(output, comment='#')) == 181


def test_polar_unknown_surface(airframe):
    with pytest.raises(SystemExit):
        run_polar(airframe, "canard")


def test_main_yaml_trim(monkeypatch, tmp_path, capsys, airframe):
    path = str(tmp_path / "glider.yaml")
    airframe.save_yaml(path)
    monkeypatch.setattr(sys, 'argv', ['aerosurfaces', '--airframe', path, '--trim', '--alpha', '3'])

    main()

    out = capsys.readouterr().out
    assert "Loaded airframe: ASK 21" in out
    assert "Pitch trim" in out


def test_main_check(monkeypatch, capsys):
    monkeypatch.setattr(sys, 'argv', ['aerosurfaces', '--check'])
    main()
    assert "CHECKS PASSED" in capsys.readouterr().out
