from scribeboard.providers.mappers import map_openai_response
from scribeboard.providers.mappers.common import to_ms


def test_maps_verbose_json_segments():
    raw = {
        'id': 'task-1',
        'language': 'en',
        'duration': 45,
        'overall_confidence': 0.76,
        'segments': [{
            'id': 'seg-1',
            'speaker': 'speaker_0',
            'start': 0,
            'end': 2.5,
            'text': 'Hello world',
            'confidence': 0.7,
            'words': [
                {'start': 0, 'end': 0.5, 'word': 'Hello'},
                {'start': 0.5, 'end': 2.5, 'word': 'world'},
            ],
        }],
    }

    result = map_openai_response(raw)

    assert result.external_job_id == 'task-1'
    assert result.language == 'en'
    assert result.duration_seconds == 45
    assert result.confidence == 0.76
    segment = result.segments[0]
    assert (segment.speaker_key, segment.start_ms, segment.end_ms, segment.text) == ('speaker_0', 0, 2500, 'Hello world')
    assert (segment.words[0].text, segment.words[0].start_ms, segment.words[0].end_ms) == ('Hello', 0, 500)
    assert result.speakers[0].speaker_key == 'speaker_0'


def test_speaker_falls_back_to_segment_id_then_index():
    raw = {'segments': [
        {'id': 7, 'start': 0, 'end': 1, 'text': 'a'},
        {'start': 1, 'end': 2, 'text': 'b'},
    ]}

    result = map_openai_response(raw)

    assert [s.speaker_key for s in result.segments] == ['7', 'speaker_2']
    assert [s.display_name for s in result.speakers] == ['Speaker 1', 'Speaker 2']


def test_missing_end_equals_start():
    result = map_openai_response({'segments': [{'speaker': 'x', 'start': 1.3, 'text': 'hi'}]})
    assert result.segments[0].start_ms == result.segments[0].end_ms == 1300


def test_word_text_key_is_accepted_verbatim():
    raw = {'segments': [{'start': 0, 'end': 1, 'text': ' hey there', 'words': [{'start': 0, 'end': 1, 'text': ' hey'}]}]}
    segment = map_openai_response(raw).segments[0]
    assert segment.text == ' hey there'
    assert segment.words[0].text == ' hey'


def test_whole_float_speaker_tag_matches_integer_key():
    raw = {'segments': [
        {'speaker': 1, 'start': 0, 'end': 1},
        {'speaker': 1.0, 'start': 1, 'end': 2},
        {'speaker': 1.5, 'start': 2, 'end': 3},
    ]}
    result = map_openai_response(raw)
    assert [s.speaker_key for s in result.segments] == ['1', '1', '1.5']
    assert [s.speaker_key for s in result.speakers] == ['1', '1.5']


def test_empty_segments():
    result = map_openai_response({'segments': []})
    assert result.segments == []
    assert result.speakers == []
    assert result.language is None
    assert result.confidence is None


def test_to_ms_rounds_half_up():
    assert to_ms(0.0625) == 63
    assert to_ms(0.1875) == 188
    assert to_ms(1.3) == 1300
    assert to_ms(None, 250) == 250
