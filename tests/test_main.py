from unittest.mock import patch

from robots_intellect.main import build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert (args.host, args.port, args.reload, args.workers) == ("127.0.0.1", 8000, False, 1)


def test_main_runs_uvicorn():
    with patch("robots_intellect.main.uvicorn.run") as run:
        main(["--port", "9001", "--reload"])

    run.assert_called_once()
    _, kwargs = run.call_args
    assert kwargs["port"] == 9001
    assert kwargs["reload"] is True
    assert kwargs["workers"] is None
