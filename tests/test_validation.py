import pytest

from buzzwall.validation import SubmissionError, clean_batch, clean_word


def test_clean_word_trims():
    assert clean_word('  synergy ') == 'synergy'


@pytest.mark.parametrize('value, message', [
    (None, 'Word is required'),
    (42, 'Word is required'),
    ('', 'Word is required'),
    ('   ', 'Word must be 1-50 characters'),
    ('x' * 51, 'Word must be 1-50 characters'),
])
def test_clean_word_rejects(value, message):
    with pytest.raises(SubmissionError, match=message):
        clean_word(value)


def test_clean_batch_drops_bad_entries():
    assert clean_batch(['a', 3, '  ', 'x' * 51, ' b ']) == ['a', 'b']


def test_clean_batch_caps_size():
    words = [f'w{i}' for i in range(100)]
    assert clean_batch(words) == words[:80]
    assert clean_batch(words, max_batch=5) == words[:5]


def test_clean_batch_with_nothing_usable():
    with pytest.raises(SubmissionError, match='No valid words provided'):
        clean_batch([None, '', 7])
