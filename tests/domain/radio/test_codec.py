"""Tests for the radio bulk text format."""

import io
from pathlib import Path

import pytest

from music_radio.domain.exceptions import (
    CapacityExceededError,
    MalformedDescriptorError,
    RadioFormatError,
    RadioIOError,
    UnknownIdError,
)
from music_radio.domain.library.models import ListenState, Track
from music_radio.domain.radio.codec import (
    dumps_radio,
    load_radio,
    loads_radio,
    read_radio,
    write_radio,
)
from music_radio.domain.radio.store import Radio

SIMPLE = (
    "2\n"
    "id:1 title:A artist:X duration:100 state:0\n"
    "id:2 title:B artist:Y duration:200 state:1\n"
    "1 2\n"
)

STATIONS = """5
id:"317" title:"Golden" artist:"Huntrix" duration:"194"
id:"482" title:"Watermelon Sugar" artist:"Harry Styles" duration:"174"
id:"105" title:"Don't Stop Believin" artist:"Journey" duration:"251"
id:"231" title:"Livin' on a Prayer" artist:"Bon Jovi" duration:"249"
id:"764" title:"Sweet Child O' Mine" artist:"Guns N' Roses" duration:"356"
482 317
105 231
231 105
764 231
"""


class FailingStream:
    """Readable stream whose reads fail after some lines."""

    def __init__(self, lines: list[str]):
        self.lines = list(lines)

    def readline(self) -> str:
        if not self.lines:
            raise OSError("device error")
        return self.lines.pop(0)


class TestReadRadio:
    """Tests for loading the bulk text format."""

    def test_simple_load(self) -> None:
        radio = loads_radio(SIMPLE)
        assert radio.track_count == 2
        assert radio.relation_count == 1
        assert radio.relation_exists(1, 2)
        assert not radio.relation_exists(2, 1)
        assert radio.get_track(2).state is ListenState.LISTENED

    def test_quoted_stations(self) -> None:
        radio = loads_radio(STATIONS)
        assert radio.track_count == 5
        assert radio.relation_count == 4
        assert radio.get_track(105).title == "Don't Stop Believin"
        assert radio.successor_ids(231) == [105]
        assert radio.relation_exists(105, 231)
        assert radio.relation_exists(231, 105)
        assert radio.out_degree(317) == 0

    def test_read_into_existing_radio(self) -> None:
        radio = Radio(capacity=5)
        assert read_radio(io.StringIO(SIMPLE), radio) is radio
        assert radio.track_count == 2

    def test_blank_lines_before_count_and_between_relations(self) -> None:
        text = "\n  \n2\nid:1\nid:2\n\n1 2\n\n2 1\n"
        radio = loads_radio(text)
        assert radio.relation_count == 2

    def test_count_with_surrounding_whitespace(self) -> None:
        assert loads_radio("  1  \nid:9\n").track_count == 1

    def test_multiple_destinations_per_line(self) -> None:
        radio = loads_radio("3\nid:1\nid:2\nid:3\n1 3 2\n")
        assert radio.successor_ids(1) == [2, 3]

    def test_origin_without_destinations(self) -> None:
        radio = loads_radio("1\nid:1\n1\n")
        assert radio.relation_count == 0

    def test_duplicate_descriptor_is_skipped(self) -> None:
        radio = loads_radio("3\nid:1 title:First\nid:2\nid:1 title:Second\n")
        assert radio.track_count == 2
        assert radio.get_track(1).title == "First"

    def test_zero_tracks(self) -> None:
        radio = loads_radio("0\n")
        assert radio.track_count == 0

    def test_crlf_line_endings(self) -> None:
        radio = loads_radio(SIMPLE.replace("\n", "\r\n"))
        assert radio.get_track(2).title == "B"
        assert radio.relation_exists(1, 2)

    def test_unquoted_mode(self) -> None:
        radio = loads_radio('1\nid:1 title:"Golden"\n', quoted=False)
        assert radio.get_track(1).title == '"Golden"'

    def test_blank_descriptor_line_is_track_zero(self) -> None:
        radio = loads_radio("2\n\nid:1\n")
        assert radio.track_count == 2
        assert radio.get_track(0) == Track()
        assert [track.id for track in radio.tracks()] == [0, 1]

    def test_descriptor_without_id(self) -> None:
        radio = loads_radio("1\ntitle:A artist:X\n0 0\n")
        assert radio.get_track(0).artist == "X"
        assert radio.relation_exists(0, 0)


class TestReadRadioErrors:
    """Tests for load failures."""

    def test_empty_input(self) -> None:
        with pytest.raises(RadioFormatError, match="Missing track count"):
            loads_radio("")

    def test_invalid_count(self) -> None:
        with pytest.raises(RadioFormatError) as exc_info:
            loads_radio("two\nid:1\n")
        assert exc_info.value.line_number == 1

    def test_negative_count(self) -> None:
        with pytest.raises(RadioFormatError):
            loads_radio("-1\n")

    def test_count_above_capacity(self) -> None:
        with pytest.raises(CapacityExceededError):
            loads_radio("3\nid:1\nid:2\nid:3\n", capacity=2)

    def test_missing_descriptor_lines(self) -> None:
        with pytest.raises(RadioFormatError, match="found 1"):
            loads_radio("2\nid:1\n")

    def test_malformed_descriptor_reports_line(self) -> None:
        with pytest.raises(MalformedDescriptorError) as exc_info:
            loads_radio("2\nid:1\nid:2 genre:rock\n")
        assert exc_info.value.line_number == 3
        assert "line 3" in str(exc_info.value)

    def test_spaced_value_is_malformed(self) -> None:
        """Test `duration: "174"` splits into two tokens and fails."""
        text = STATIONS.replace('duration:"174"', 'duration: "174"')
        with pytest.raises(MalformedDescriptorError) as exc_info:
            loads_radio(text)
        assert exc_info.value.line_number == 3

    def test_unknown_relation_id(self) -> None:
        with pytest.raises(UnknownIdError) as exc_info:
            loads_radio("2\nid:1\nid:2\n1 2\n1 3\n")
        assert exc_info.value.track_id == 3
        assert exc_info.value.line_number == 5

    def test_non_integer_relation_token(self) -> None:
        with pytest.raises(RadioFormatError) as exc_info:
            loads_radio("1\nid:1\n1 x\n")
        assert exc_info.value.line_number == 3

    def test_partial_load_is_not_rolled_back(self) -> None:
        """Test read_radio leaves earlier tracks and relations in place."""
        radio = Radio()
        with pytest.raises(UnknownIdError):
            read_radio(io.StringIO("2\nid:1\nid:2\n1 2\n2 7\n"), radio)
        assert radio.track_count == 2
        assert radio.relation_exists(1, 2)

    def test_read_failure(self) -> None:
        stream = FailingStream(["2\n", "id:1\n"])
        with pytest.raises(RadioIOError) as exc_info:
            read_radio(stream, Radio())
        assert isinstance(exc_info.value.__cause__, OSError)


class TestLoadRadio:
    """Tests for load_radio sources."""

    def test_load_from_path(self, tmp_path: Path) -> None:
        path = tmp_path / "radio.txt"
        path.write_text(SIMPLE, encoding="utf-8")
        radio = load_radio(path)
        assert radio.track_count == 2
        assert load_radio(str(path)).relation_count == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(RadioIOError, match="Could not open"):
            load_radio(tmp_path / "missing.txt")

    def test_capacity(self) -> None:
        radio = load_radio(io.StringIO(SIMPLE), capacity=2)
        assert radio.capacity == 2
        assert radio.is_full


class TestWriteRadio:
    """Tests for writing the bulk text format."""

    def test_dumps(self) -> None:
        assert dumps_radio(loads_radio(SIMPLE)) == (
            "2\n"
            'id:1 title:"A" artist:"X" duration:100 state:NOT_LISTENED\n'
            'id:2 title:"B" artist:"Y" duration:200 state:LISTENED\n'
            "1 2\n"
        )

    def test_write_returns_length(self) -> None:
        sink = io.StringIO()
        written = write_radio(loads_radio(STATIONS), sink)
        assert written == len(sink.getvalue())

    def test_empty_radio(self) -> None:
        assert dumps_radio(Radio()) == "0\n"

    def test_round_trip(self) -> None:
        """Test written output loads back into an identical radio."""
        radio = Radio()
        radio.add_track(Track(50, "Paint It, Black", "The Rolling Stones", 202))
        radio.add_track(Track(10, "Every Breath You Take", "The Police", 253))
        radio.add_track(Track(30, "", "", 0, ListenState.LISTENED))
        for orig, dest in [(50, 30), (50, 10), (10, 50), (30, 30)]:
            radio.new_relation(orig, dest)

        reloaded = loads_radio(dumps_radio(radio))

        assert reloaded.track_count == radio.track_count
        assert reloaded.relation_count == radio.relation_count
        assert list(reloaded.tracks()) == list(radio.tracks())
        assert [t.state for t in reloaded.tracks()] == [t.state for t in radio.tracks()]
        for orig in (50, 10, 30):
            for dest in (50, 10, 30):
                assert reloaded.relation_exists(orig, dest) == radio.relation_exists(
                    orig, dest
                )

    def test_write_failure(self) -> None:
        class BrokenSink:
            def write(self, text: str) -> int:
                raise OSError("broken pipe")

        with pytest.raises(RadioIOError):
            write_radio(loads_radio(SIMPLE), BrokenSink())

    def test_unquoted_round_trip_keeps_quote_marks(self) -> None:
        """Test a radio loaded without quoting dumps in the same mode."""
        radio = loads_radio('1\nid:1 title:"Golden" artist:X\n', quoted=False)
        text = dumps_radio(radio)
        assert text == '1\nid:1 title:"Golden" artist:X duration:0 state:NOT_LISTENED\n'

        reloaded = loads_radio(text, quoted=False)
        assert reloaded.get_track(1).title == '"Golden"'

    def test_quoting_override(self) -> None:
        radio = loads_radio(SIMPLE, quoted=False)
        assert loads_radio(dumps_radio(radio, quoted=True)).get_track(1).title == "A"

    def test_unquoted_rejects_spaced_value(self) -> None:
        radio = Radio(quoted_values=False)
        radio.add_track(Track(1, "Golden Hour", "X", 5))
        with pytest.raises(MalformedDescriptorError):
            dumps_radio(radio)
        assert "Golden Hour" in dumps_radio(radio, quoted=True)
