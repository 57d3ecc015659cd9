""" Test the command-line driver. """

# pylint: disable=invalid-name, redefined-outer-name

import json
import logging
import math
import subprocess
import sys

import pytest

from lorentzvector import cli


def run_json(capsys, *argv):
    assert cli.main(['--format', 'json', *argv]) == 0
    return json.loads(capsys.readouterr().out)


def test_inspect(capsys):
    res = run_json(capsys, 'inspect', '-p', '1', '0', '0', '0')
    assert res['p'] == [1., 0., 0., 0.]
    assert res['square'] == 1.
    assert res['pt'] == 0.
    assert res['pseudo_rap'] == sys.float_info.max
    assert 'getdelphi' not in res


def test_inspect_pair(capsys):
    res = run_json(capsys, 'inspect', '-p', '1', '1', '0', '0', '-q', '1', '0', '1', '0')
    assert res['dot'] == 1.
    assert res['getdelphi'] == pytest.approx(math.pi / 2.)
    assert res['delta_r'] == pytest.approx(math.pi / 2.)


def test_boost(capsys):
    res = run_json(capsys, 'boost', '-p', '1', '0', '0', '0', '--beta', '0', '0', '0.6')
    assert res['boosted'] == pytest.approx([1.25, 0., 0., 0.75])
    assert res['invariant'] is True


def test_boost_from_to(capsys):
    res = run_json(capsys, 'boost_from_to', '-k', '5', '1', '2', '3',
                   '-p', '5', '1', '2', '3', '-q', str(math.sqrt(22.)), '1', '1', '3')
    assert res['boosted'] == pytest.approx([math.sqrt(22.), 1., 1., 3.])
    assert res['invariant'] is True


def test_com_to_lab(capsys):
    e = math.sqrt(0.1) * 100.
    momenta = []
    for m in ([e, 0., 0., e], [e, 0., 0., -e], [e, 0., e, 0.], [e, 0., -e, 0.]):
        momenta += ['-m', *map(str, m)]
    res = run_json(capsys, 'com_to_lab', '--x1', '0.2', '--x2', '0.5',
                   '--ebeam1', '100', '--ebeam2', '100', *momenta)
    assert len(res['boosted']) == 4
    assert res['boosted'][0] == pytest.approx([20., 0., 0., 20.])
    assert res['boosted'][1] == pytest.approx([50., 0., 0., -50.])
    assert res['momenta'][0] == pytest.approx([e, 0., 0., e])


def test_com_to_lab_needs_incoming_momenta(caplog):
    assert cli.main(['com_to_lab', '--x1', '0.2', '--x2', '0.5', '-m', '1', '0', '0', '1']) == 1
    assert 'incoming momenta' in caplog.text


def test_text_report(caplog):
    with caplog.at_level(logging.INFO, logger='LorentzVector'):
        assert cli.main(['inspect', '-p', '13', '3', '4', '12']) == 0
    assert 'pseudo_rap' in caplog.text
    assert '+5.0000000000000000e+00' in caplog.text


def test_missing_command():
    with pytest.raises(SystemExit):
        cli.main([])


def test_library_import_does_not_load_the_driver():
    code = 'import sys, lorentzvector; sys.exit("lorentzvector.cli" in sys.modules)'
    assert subprocess.run([sys.executable, '-c', code], check=False).returncode == 0
