#!/usr/bin/env python3
"""
Tests for the command-line entry point.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from main import build_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.type == "star_system"
        assert args.seed is None
        assert args.max_children == 25
        assert args.advance == 0.0
        assert args.steps == 1
        assert not args.populate


class TestMain:
    """Tests for running the CLI."""

    def test_list(self, capsys):
        assert main(["--list"]) == 0
        out = capsys.readouterr().out
        assert "star_system" in out
        assert "oort_cloud" in out

    def test_sunlike_system(self, capsys):
        assert main(["--seed", "5", "--sunlike", "--quiet"]) == 0
        out = capsys.readouterr().out
        assert "Seed: 5" in out
        assert "star-system-0001" in out

    def test_unknown_type(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--type", "quasar", "--quiet"])
        assert excinfo.value.code == 2

    def test_invalid_max_children(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--max-children", "-1", "--quiet"])
        assert excinfo.value.code == 2

    def test_advance(self, capsys):
        assert main(["--seed", "5", "--sunlike", "--quiet", "--advance", "3600", "--steps", "2"]) == 0
        out = capsys.readouterr().out
        assert "Advancing orbits" in out

    def test_populate(self, capsys):
        assert main(["--type", "asteroid_field", "--seed", "2", "--populate",
                     "--max-children", "3", "--quiet"]) == 0
        out = capsys.readouterr().out
        assert "Population: 3 children placed" in out
