from scribeboard.providers.mappers import map_elevenlabs_response


def test_maps_utterances_with_word_timings():
    raw = {
        'id': 'job-1',
        'transcript': {
            'language': 'fr',
            'duration': 87,
            'confidence': 0.82,
            'utterances': [{
                'speaker': 'A',
                'start': 0,
                'end': 1.4,
                'text': 'Bonjour',
                'confidence': 0.9,
                'words': [
                    {'start': 0, 'end': 0.4, 'text': 'Bon', 'confidence': 0.8},
                    {'start': 0.4, 'end': 1.4, 'text': 'jour', 'confidence': 0.85},
                ],
            }],
        },
    }

    result = map_elevenlabs_response(raw)

    assert result.external_job_id == 'job-1'
    assert result.language == 'fr'
    assert result.duration_seconds == 87
    assert result.confidence == 0.82
    segment = result.segments[0]
    assert (segment.speaker_key, segment.start_ms, segment.end_ms) == ('A', 0, 1400)
    assert [(w.start_ms, w.end_ms, w.text) for w in segment.words] == [(0, 400, 'Bon'), (400, 1400, 'jour')]
    assert segment.words[1].confidence == 0.85
    assert result.speakers[0].display_name == 'Speaker 1'


def test_speakers_enumerated_by_first_appearance():
    raw = {'transcript': {'utterances': [
        {'speaker': 'B', 'start': 0, 'end': 1},
        {'speaker': 'A', 'start': 1, 'end': 2},
        {'speaker': 'B', 'start': 2, 'end': 3},
    ]}}

    result = map_elevenlabs_response(raw)

    assert [(s.speaker_key, s.display_name) for s in result.speakers] == [
        ('B', 'Speaker 1'),
        ('A', 'Speaker 2'),
    ]


def test_key_falls_back_to_user_id_then_index():
    raw = {'transcript': {'utterances': [{'user_id': 'u-9', 'start': 0}, {'start': 1}]}}
    result = map_elevenlabs_response(raw)
    assert [s.speaker_key for s in result.segments] == ['u-9', 'speaker_2']


def test_missing_times_fall_back_to_anchors():
    raw = {'transcript': {'utterances': [{
        'speaker': 'A',
        'start': 2.5,
        'words': [{'text': 'no-times'}, {'start': 3, 'text': 'no-end'}],
    }]}}

    segment = map_elevenlabs_response(raw).segments[0]

    assert (segment.start_ms, segment.end_ms) == (2500, 2500)
    assert [(w.start_ms, w.end_ms) for w in segment.words] == [(2500, 2500), (3000, 3000)]


def test_end_before_start_is_clamped():
    raw = {'transcript': {'utterances': [{'speaker': 'A', 'start': 5, 'end': 4}]}}
    segment = map_elevenlabs_response(raw).segments[0]
    assert segment.end_ms == segment.start_ms == 5000


def test_empty_word_list_means_no_words():
    raw = {'transcript': {'utterances': [{'speaker': 'A', 'start': 0, 'end': 1, 'words': []}]}}
    assert map_elevenlabs_response(raw).segments[0].words is None


def test_empty_utterances():
    result = map_elevenlabs_response({'transcript': {'utterances': []}})
    assert result.segments == []
    assert result.speakers == []
    assert result.language is None
    assert result.duration_seconds is None
    assert result.confidence is None
    assert result.external_job_id is None


def test_spacing_tokens_and_text_kept_verbatim():
    raw = {'transcript': {'utterances': [{
        'speaker': 'A', 'start': 0, 'end': 1, 'text': 'Bon jour ',
        'words': [
            {'start': 0, 'end': 0.4, 'text': 'Bon'},
            {'start': 0.4, 'end': 0.5, 'text': ' '},
            {'start': 0.5, 'end': 1, 'text': 'jour'},
        ],
    }]}}

    segment = map_elevenlabs_response(raw).segments[0]

    assert segment.text == 'Bon jour '
    assert [w.text for w in segment.words] == ['Bon', ' ', 'jour']
