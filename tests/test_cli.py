import json

from click.testing import CliRunner

from artnorm.cli.main import cli
from artnorm.normalizer.timestamps import SENTINEL_TIMESTAMP


def _documents(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_normalize_json_records():
    runner = CliRunner()
    stdin = "\n".join(
        [
            '{"path": "X.EXE-1.pf", "plugin": "pecmd", "data": '
            '{"LastRun": "2021-01-01T00:00:00.1230000Z", "RunCount": "3", "ExecutableName": "X.EXE"}}',
            '{"plugin": "foo", "data": {"a": 1, "b": ""}}',
        ]
    )
    result = runner.invoke(cli, ["--quiet", "normalize"], input=stdin)

    assert result.exit_code == 0, result.output
    docs = _documents(result.stdout)
    assert len(docs) == 3
    assert docs[0]["prefetch"]["runs"] == ["2021-01-01T00:00:00.123Z"]
    assert docs[1]["event"]["action"] == "process-start"
    assert docs[2] == {"plugin": "foo", "data": {"a": 1}, "@timestamp": SENTINEL_TIMESTAMP}


def test_normalize_tagged_lines():
    runner = CliRunner()
    stdin = 'mftecmd:{"ParentPath": ".\\\\Users", "FileName": "bob", "IsDirectory": true, ' \
        '"Created0x10": "2020-01-01T00:00:00.0000000+00:00"}\n'
    result = runner.invoke(cli, ["--quiet", "normalize", "--path", "C:\\$MFT"], input=stdin)

    assert result.exit_code == 0, result.output
    docs = _documents(result.stdout)
    assert len(docs) == 2
    assert docs[0]["file"]["path"] == ".\\Users\\bob"
    assert docs[0]["log"] == {"file": {"path": "C:\\$MFT"}}
    assert docs[1]["event"]["action"] == "file-created"


def test_normalize_syslog_with_forced_tag():
    runner = CliRunner()
    stdin = "Dec 31 23:59:59 host app[7]: bye\nJan 10 08:00:00 host app[7]: hello\n"
    result = runner.invoke(
        cli,
        ["--quiet", "normalize", "--tag", "application/syslog", "--now", "2024-01-15"],
        input=stdin,
    )

    assert result.exit_code == 0, result.output
    docs = _documents(result.stdout)
    assert [d["@timestamp"] for d in docs] == ["2023-12-31T23:59:59", "2024-01-10T08:00:00"]
    assert [d["message"] for d in docs] == ["bye", "hello"]


def test_normalize_json_format():
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--quiet", "--format", "json", "normalize"], input='{"plugin": "foo"}\n'
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == [{"plugin": "foo", "@timestamp": SENTINEL_TIMESTAMP}]


def test_normalize_human_format():
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--quiet", "--format", "human", "normalize"],
        input='pecmd:{"LastRun": "2021-01-01T00:00:00Z", "ExecutableName": "X.EXE"}\n',
    )

    assert result.exit_code == 0, result.output
    assert "@timestamp" in result.stdout
    assert "process-start" in result.stdout
    assert "Total: 2 records" in result.stdout


def test_normalize_bad_input_line():
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--quiet", "normalize"], input='{"plugin": "foo"}\nthis is not a record\n'
    )

    assert result.exit_code == 1
    docs = _documents(result.stdout)
    assert docs[0]["plugin"] == "foo"
    assert docs[-1]["code"] == "INVALID_FORMAT"
    assert docs[-1]["context"] == {"line_number": 2}


def test_normalize_missing_config(tmp_path):
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--quiet", "normalize", "--config", str(tmp_path / "absent.yaml")],
        input="",
    )

    assert result.exit_code == 1
    assert _documents(result.stdout)[0]["code"] == "CONFIG_ERROR"


def test_normalize_unknown_mapper_in_config(tmp_path):
    config = tmp_path / "routes.yaml"
    config.write_text("plugins:\n  evtxecmd: evtx\n")
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--quiet", "normalize", "--config", str(config)], input=""
    )

    assert result.exit_code == 1
    assert _documents(result.stdout)[0]["code"] == "UNSUPPORTED_ARTIFACT"


def test_normalize_reads_file(tmp_path):
    source = tmp_path / "records.jsonl"
    source.write_text('{"plugin": "foo", "data": {"n": 0}}\n')
    runner = CliRunner()
    result = runner.invoke(cli, ["--quiet", "normalize", str(source)])

    assert result.exit_code == 0, result.output
    assert _documents(result.stdout) == [
        {"plugin": "foo", "data": {"n": 0}, "@timestamp": SENTINEL_TIMESTAMP}
    ]


def test_mappers_command():
    runner = CliRunner()
    result = runner.invoke(cli, ["--quiet", "--format", "json", "mappers"])

    assert result.exit_code == 0, result.output
    rows = {row["mapper"]: row for row in json.loads(result.stdout)}
    assert rows["prefetch"]["tags"] == ["pecmd"]
    assert rows["syslog"]["tags"] == ["application/syslog"]
    assert rows["mft"]["events"][0] == "mft.modified -> file-modified"


def test_mappers_human():
    runner = CliRunner()
    result = runner.invoke(cli, ["--format", "human", "mappers"])

    assert result.exit_code == 0, result.output
    assert "jumplist" in result.stdout
    assert "jlecmd" in result.stdout


def test_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "artnorm" in result.stdout
