import pytest

from artnorm.core.config import NormalizerConfig
from artnorm.core.errors import UnknownMapperError
from artnorm.mappers.lnk import LnkMapper
from artnorm.mappers.syslog import SyslogMapper
from artnorm.models.record import RawRecord
from artnorm.normalizer.dispatcher import Dispatcher
from artnorm.normalizer.pipeline import Pipeline
from artnorm.normalizer.timestamps import SENTINEL_TIMESTAMP

from .helpers import NOW, assert_clean


def test_dispatcher_routes_plugin_then_type():
    dispatcher = Dispatcher()

    assert isinstance(dispatcher.resolve(RawRecord(plugin="lecmd")), LnkMapper)
    assert isinstance(dispatcher.resolve(RawRecord(type="application/syslog")), SyslogMapper)
    assert isinstance(
        dispatcher.resolve(RawRecord(plugin="unknown", type="application/syslog")),
        SyslogMapper,
    )
    assert dispatcher.resolve(RawRecord(plugin="foo")) is None
    assert dispatcher.resolve(RawRecord()) is None


def test_dispatcher_plugin_wins_over_type():
    dispatcher = Dispatcher()
    record = RawRecord(plugin="lecmd", type="application/syslog")
    assert isinstance(dispatcher.resolve(record), LnkMapper)


def test_dispatcher_rejects_unknown_mapper():
    config = NormalizerConfig(plugins={"evtxecmd": "evtx"})
    with pytest.raises(UnknownMapperError) as excinfo:
        Dispatcher(config)
    assert excinfo.value.error.code == "UNSUPPORTED_ARTIFACT"
    assert "evtx" in excinfo.value.error.message


def test_custom_routes():
    config = NormalizerConfig(plugins={"lnkparse": "lnk"}, types={})
    pipeline = Pipeline(config, now=NOW)

    docs = pipeline.process(
        {"plugin": "lnkparse", "data": {"LocalPath": "C:\\a.txt", "FileAttributes": 32}}
    )
    assert docs[0]["file"]["name"] == "a.txt"

    # Default routes are replaced, not merged
    passthrough = pipeline.process({"type": "application/syslog", "data": "x"})
    assert passthrough == [
        {"type": "application/syslog", "data": "x", "@timestamp": SENTINEL_TIMESTAMP}
    ]


def test_unknown_plugin_passes_through(pipeline):
    docs = pipeline.process(
        {"path": "x", "plugin": "foo", "data": {"a": 1, "b": "", "c": {"d": None}}}
    )
    assert docs == [
        {"path": "x", "plugin": "foo", "data": {"a": 1}, "@timestamp": SENTINEL_TIMESTAMP}
    ]


def test_extra_input_keys_are_kept(pipeline):
    docs = pipeline.process({"plugin": "foo", "data": "x", "collector": "host-7"})
    assert docs[0]["collector"] == "host-7"


def test_wrong_data_shape_passes_through(pipeline):
    docs = pipeline.process({"plugin": "pecmd", "data": "not a mapping"})
    assert docs == [
        {"plugin": "pecmd", "data": "not a mapping", "@timestamp": SENTINEL_TIMESTAMP}
    ]

    docs = pipeline.process({"type": "application/syslog", "data": {"line": "x"}})
    assert docs == [
        {
            "type": "application/syslog",
            "data": {"line": "x"},
            "@timestamp": SENTINEL_TIMESTAMP,
        }
    ]


def test_invalid_record_passes_through(pipeline):
    docs = pipeline.process({"plugin": "lecmd", "data": 42})
    assert docs == [{"plugin": "lecmd", "data": 42, "@timestamp": SENTINEL_TIMESTAMP}]


def test_every_document_is_clean_and_timestamped(
    pipeline, lecmd_record, mft_record, pecmd_record
):
    records = [
        lecmd_record,
        mft_record,
        pecmd_record,
        {"type": "application/syslog", "data": "Jan 10 12:34:56 h sshd[1]: ok"},
        {"plugin": "foo", "data": {"x": [None, ""]}},
        {"plugin": "lecmd", "data": {}},
    ]
    docs = list(pipeline.process_stream(records))

    assert docs
    for doc in docs:
        assert "@timestamp" in doc
        assert_clean(doc)


def test_empty_lnk_record_yields_only_base(pipeline):
    docs = pipeline.process({"plugin": "lecmd", "data": {}})
    assert docs == [{"@timestamp": SENTINEL_TIMESTAMP}]


def test_record_model_input(pipeline):
    record = RawRecord(plugin="pecmd", data={"ExecutableName": "A.EXE"})
    docs = pipeline.process(record)
    assert docs == [{"process": {"name": "A.EXE"}, "@timestamp": SENTINEL_TIMESTAMP}]


def test_configured_sentinel():
    pipeline = Pipeline(NormalizerConfig(sentinel_timestamp="1970-01-01T00:00:00.000Z"))
    docs = pipeline.process({"plugin": "foo"})
    assert docs == [{"plugin": "foo", "@timestamp": "1970-01-01T00:00:00.000Z"}]


def test_stream_preserves_order(pipeline):
    records = [{"plugin": "foo", "data": {"n": n}} for n in range(5)]
    docs = list(pipeline.process_stream(records))
    assert [d["data"]["n"] for d in docs] == [0, 1, 2, 3, 4]
