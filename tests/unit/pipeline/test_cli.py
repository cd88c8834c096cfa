from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from lrckaraoke import cli as cli_module
from lrckaraoke.core.karaoke import PipelineResult
from lrckaraoke.exceptions import DownloadError


def _invoke(args):
    return CliRunner().invoke(cli_module.cli, args, obj={})


def test_version():
    result = _invoke(["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_convert_writes_ass(temp_dir, enhanced_lrc):
    lrc_path = temp_dir / "song.lrc"
    lrc_path.write_text(enhanced_lrc, encoding="utf-8")
    ass_path = temp_dir / "song.ass"

    result = _invoke(["convert", str(lrc_path), str(ass_path), "--resolution", "720p",
                      "--font", "Arial", "--transition", "0.5"])

    assert result.exit_code == 0, result.output
    document = ass_path.read_text(encoding="utf-8")
    assert "PlayResY: 720" in document
    assert "Style: Current,Arial," in document
    assert "\\fad(500,0)" in document


def test_convert_rejects_bad_resolution(temp_dir, plain_lrc):
    lrc_path = temp_dir / "song.lrc"
    lrc_path.write_text(plain_lrc, encoding="utf-8")

    result = _invoke(["convert", str(lrc_path), str(temp_dir / "o.ass"), "--resolution", "huge"])

    assert result.exit_code == 2
    assert "Invalid resolution" in result.output


def test_convert_rejects_bad_transition(temp_dir, plain_lrc):
    lrc_path = temp_dir / "song.lrc"
    lrc_path.write_text(plain_lrc, encoding="utf-8")

    result = _invoke(["convert", str(lrc_path), str(temp_dir / "o.ass"), "--transition", "-1"])

    assert result.exit_code == 1
    assert not (temp_dir / "o.ass").exists()


def test_generate_runs_pipeline(temp_dir, sample_url):
    pipeline = MagicMock()
    pipeline.run.return_value = PipelineResult(
        output_path=temp_dir / "out.mp4",
        ass_path=temp_dir / "lyrics.ass",
        audio_path=temp_dir / "downloaded.wav",
        artist="A",
        title="T",
        line_count=3,
    )

    with patch.object(cli_module, "KaraokePipeline", return_value=pipeline) as mock_cls:
        result = _invoke(["generate", sample_url, "--artist", "A", "--title", "T",
                          "--separate", "--separator", "/opt/sep",
                          "--work-dir", str(temp_dir / "w"), "--output-dir", str(temp_dir / "o")])

    assert result.exit_code == 0, result.output
    paths = mock_cls.call_args.kwargs["paths"]
    assert paths.separator_binary == Path("/opt/sep")
    assert paths.temp_dir == temp_dir / "w"
    assert paths.output_dir == temp_dir / "o"
    pipeline.run.assert_called_once_with(
        sample_url, artist="A", title="T", separate=True, output_name=None
    )


def test_generate_reports_errors(sample_url):
    pipeline = MagicMock()
    pipeline.run.side_effect = DownloadError("blocked")

    with patch.object(cli_module, "KaraokePipeline", return_value=pipeline):
        result = _invoke(["generate", sample_url])

    assert result.exit_code == 1
    assert "blocked" in result.output


def test_generate_rejects_invalid_url():
    result = _invoke(["generate", "not-a-url"])

    assert result.exit_code == 1
    assert "Invalid URL" in result.output


def test_fetch_prints_lyrics():
    with patch.object(cli_module, "LyricsFetcher") as mock_cls:
        mock_cls.return_value.fetch_lyrics.return_value = "[00:01.00]Hi"
        result = _invoke(["fetch", "Artist", "Song"])

    assert result.exit_code == 0
    assert "[00:01.00]Hi" in result.output


def test_fetch_saves_to_file(temp_dir):
    out = temp_dir / "song.lrc"
    with patch.object(cli_module, "LyricsFetcher") as mock_cls:
        mock_cls.return_value.fetch_lyrics.return_value = "[00:01.00]Hi"
        result = _invoke(["fetch", "Artist", "Song", "-o", str(out)])

    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8") == "[00:01.00]Hi"


def test_fetch_not_found():
    with patch.object(cli_module, "LyricsFetcher") as mock_cls:
        mock_cls.return_value.fetch_lyrics.return_value = None
        result = _invoke(["fetch", "Artist", "Song"])

    assert result.exit_code == 1


def test_fetch_unwritable_output_exits_cleanly(temp_dir):
    out = temp_dir / "missing_dir" / "song.lrc"
    with patch.object(cli_module, "LyricsFetcher") as mock_cls:
        mock_cls.return_value.fetch_lyrics.return_value = "[00:01.00]Hi"
        result = _invoke(["fetch", "Artist", "Song", "-o", str(out)])

    assert result.exit_code == 1
    assert "Cannot write lyrics" in result.output
    assert not isinstance(result.exception, OSError)
