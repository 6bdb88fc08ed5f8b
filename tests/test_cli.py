"""
Tests for the command line pipeline.
"""

import argparse
import json
import sys
from pathlib import Path

import pytest
from PIL import Image

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from chromagrid.cli import load_gates, main, parse_point, run_pipeline


@pytest.fixture
def level_image(tmp_path):
    """8x2 image -> 4x1 logical row: red, red, blue, red."""
    img = Image.new('RGB', (8, 2), (255, 0, 0))
    for x in (4, 5):
        for y in (0, 1):
            img.putpixel((x, y), (0, 0, 255))
    path = tmp_path / 'level.png'
    img.save(path)
    return path


def test_parse_point():
    assert parse_point('4,2') == (4, 2)
    assert parse_point('-2,10') == (-2, 10)

    with pytest.raises(argparse.ArgumentTypeError):
        parse_point('4')
    with pytest.raises(argparse.ArgumentTypeError):
        parse_point('a,b')


def test_load_gates_merges_sources(tmp_path):
    gates_file = tmp_path / 'gates.json'
    gates_file.write_text(json.dumps([[6, 0], [0, 2]]))

    gates = load_gates([(2, 0)], str(gates_file))

    assert gates == [(2, 0), (6, 0), (0, 2)]
    assert load_gates(None, None) == []


def test_run_pipeline(level_image):
    graph = run_pipeline(str(level_image), gates=[])

    assert (graph.size_x, graph.size_y) == (4, 1)
    right = graph.lookup_cell(0, 0).right
    assert (right.x, right.y) == (1, 0)


def test_main_exports_json(level_image, tmp_path):
    out = tmp_path / 'out' / 'graph.json'

    code = main([str(level_image), '--gate', '2,0', '--export', str(out)])

    assert code == 0
    data = json.loads(out.read_text())
    assert data['size_x'] == 4
    cells = {(c['x'], c['y']): c for c in data['cells']}
    assert cells[(1, 0)]['gate'] is True
    # Gate at (1,0) is skipped: (0,0) sees (3,0) past the gate and the blue cell
    assert cells[(0, 0)]['right'] == [3, 0]
    assert cells[(2, 0)]['left'] is None


def test_main_ascii(level_image, capsys):
    code = main([str(level_image), '--ascii'])

    assert code == 0
    out = capsys.readouterr().out
    assert "NEIGHBOR COUNTS" in out
    assert "1201" in out


def test_main_missing_image(tmp_path):
    assert main([str(tmp_path / 'missing.png')]) == 1
