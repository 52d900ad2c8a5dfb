import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votesim.system
import votesim.__main__ as cli


def test_list(capsys):
    cli.main(list_methods=True)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith(str(votesim.system.method_count()))
    assert [line.split()[0] for line in lines[1:]] \
        == votesim.system.method_list()


@pytest.mark.parametrize('args', [
    ['-n', '20', '-c', '3', '-s', '1'],
    ['-n', '15', '-c', '4', '-s', '2', '-S', '.4', '-p', 'reset', '-q'],
])
def test_run(capsys, args):
    cli.main(**vars(cli.argparser.parse_args(args)))
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith('Evaluating')
    results = lines[2:]
    assert [line.split()[0] for line in results] \
        == votesim.system.method_list()
    for line in results:
        assert 'failed' not in line


def test_format_ranking():
    assert cli.format_ranking([2, 0, 1]) == '2 > 0 > 1'
