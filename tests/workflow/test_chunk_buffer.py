"""Tests for record reassembly across network reads."""

from services.workflow.chunk_buffer import ChunkBuffer


STREAM = (
    'data: {"event": "node_finished", "data": {"title": "知识检索"}}\n'
    'data: {"event": "workflow_finished"}\n'
).encode()


def test_record_split_across_reads_is_released_once_complete():
    buffer = ChunkBuffer()

    assert buffer.feed(b'data: {"event": "work') == []
    assert buffer.pending == 'data: {"event": "work'

    records = buffer.feed(b'flow_finished"}\ndata: {"ev')
    assert records == ['data: {"event": "workflow_finished"}']
    assert buffer.pending == 'data: {"ev'


def test_several_records_in_one_read_come_back_in_order():
    buffer = ChunkBuffer()

    assert buffer.feed(b"one\n\ntwo\nthree") == ["one", "", "two"]
    assert buffer.pending == "three"


def test_chunking_does_not_change_the_records():
    whole = ChunkBuffer().feed(STREAM)

    for size in (1, 2, 3, 7, 16):
        buffer = ChunkBuffer()
        records: list[str] = []
        for start in range(0, len(STREAM), size):
            records.extend(buffer.feed(STREAM[start : start + size]))
        assert records == whole, f"chunk size {size}"


def test_multibyte_character_cut_by_the_network_is_not_mangled():
    encoded = "知识检索\n".encode()
    buffer = ChunkBuffer()

    # Split inside the first three-byte character
    assert buffer.feed(encoded[:1]) == []
    assert buffer.feed(encoded[1:]) == ["知识检索"]


def test_close_discards_trailing_fragment():
    buffer = ChunkBuffer()
    buffer.feed(b'data: {"event": "workflow_finished"}\ndata: {"event": "node_')

    buffer.close()

    assert buffer.pending == ""
    assert buffer.discarded == 'data: {"event": "node_'


def test_close_on_clean_boundary_discards_nothing():
    buffer = ChunkBuffer()
    buffer.feed(b"data: {}\n")

    buffer.close()

    assert buffer.discarded == ""
