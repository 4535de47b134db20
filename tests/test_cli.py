import pytest

from falling_blocks.__main__ import build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args(["play"])
    assert args.command == "play"
    assert args.seed is None
    assert args.cell_size == 30
    assert not args.mono
    assert not args.mute

    args = build_parser().parse_args(["serve", "--port", "8080"])
    assert args.port == 8080
    assert args.root is None


def test_command_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_random_command_prints_summary(capsys):
    main(["random", "--steps", "20", "--seed", "1"])
    assert "Random agent total reward" in capsys.readouterr().out
