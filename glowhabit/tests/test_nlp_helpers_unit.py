import pytest
from unittest.mock import Mock, patch

from glowhabit.helpers import nlp_helpers


class TestNLPHelpersUnit:

    @pytest.fixture(autouse=True)
    def fresh_cache(self):
        nlp_helpers.reset_lexicon_cache()
        yield
        nlp_helpers.reset_lexicon_cache()

    def test_preprocess_text(self):
        assert nlp_helpers.preprocess_text("  HeLLo  ") == "hello"
        assert nlp_helpers.preprocess_text("") == ""

    def test_tokenize(self):
        assert nlp_helpers.tokenize("Don't STOP, believing!") == ["don't", 'stop', 'believing']
        assert nlp_helpers.tokenize("   ") == []

    def test_tokenize_uses_nltk_tokenizer(self):
        from nltk.tokenize import RegexpTokenizer

        assert isinstance(nlp_helpers._get_tokenizer(), RegexpTokenizer)
        assert nlp_helpers._get_tokenizer() is nlp_helpers._get_tokenizer()
        assert nlp_helpers.tokenize("Day 2: rock'n'roll") == ['day', '2', "rock'n'roll"]

    def test_word_count(self):
        assert nlp_helpers.word_count("  two   words ") == 2
        assert nlp_helpers.word_count("") == 0

    def test_score_tokens(self, lexicon):
        result = nlp_helpers.score_tokens(['a', 'happy', 'but', 'tired', 'day'], lexicon)
        assert result['score'] == pytest.approx(0.8)
        assert result['comparative'] == pytest.approx(0.16)
        assert result['positive'] == ['happy']
        assert result['negative'] == ['tired']

    def test_score_tokens_negation_flips(self, lexicon):
        result = nlp_helpers.score_tokens(['not', 'happy'], lexicon)
        assert result['score'] == pytest.approx(-2.7)
        assert result['negative'] == ['happy']

    def test_score_tokens_empty(self, lexicon):
        assert nlp_helpers.score_tokens([], lexicon)['comparative'] == 0.0

    def test_detect_emotions_order_and_limit(self):
        assert nlp_helpers.detect_emotions("Calm but stressed, happy and anxious") == ['calm', 'stressed', 'happy']

    def test_detect_emotions_substring_match(self):
        # "too much" is a multi-word keyword
        assert nlp_helpers.detect_emotions("It was TOO MUCH today") == ['overwhelmed']
        assert nlp_helpers.detect_emotions("") == []

    def test_load_lexicon_success(self):
        analyzer = Mock()
        analyzer.return_value.lexicon = {'good': 1.9}
        with patch('glowhabit.helpers.nlp_helpers._ensure_nltk'), \
             patch('nltk.sentiment.vader.SentimentIntensityAnalyzer', analyzer):
            assert nlp_helpers.load_lexicon() == {'good': 1.9}
            # Cached after the first load
            nlp_helpers.load_lexicon()
        assert analyzer.call_count == 1

    def test_load_lexicon_falls_back_to_empty(self):
        with patch('glowhabit.helpers.nlp_helpers._ensure_nltk', side_effect=LookupError("vader_lexicon")):
            assert nlp_helpers.load_lexicon() == {}

    def test_empty_fallback_is_cached(self):
        with patch('glowhabit.helpers.nlp_helpers._ensure_nltk', side_effect=LookupError("vader_lexicon")) as mock_ensure:
            assert nlp_helpers.load_lexicon() == {}
            assert nlp_helpers.load_lexicon() == {}
        mock_ensure.assert_called_once()

        nlp_helpers.reset_lexicon_cache()
        with patch('glowhabit.helpers.nlp_helpers._ensure_nltk', side_effect=LookupError("vader_lexicon")) as mock_ensure:
            nlp_helpers.load_lexicon()
        mock_ensure.assert_called_once()

    def test_ensure_nltk_respects_auto_download(self):
        with patch('nltk.data.find', side_effect=LookupError("missing")), \
             patch('nltk.download') as mock_download, \
             patch('glowhabit.helpers.nlp_helpers.settings') as mock_settings:
            mock_settings.NLTK_AUTO_DOWNLOAD = False
            with pytest.raises(LookupError):
                nlp_helpers._ensure_nltk()
            mock_download.assert_not_called()

            mock_settings.NLTK_AUTO_DOWNLOAD = True
            nlp_helpers._ensure_nltk()
            mock_download.assert_called_once_with('vader_lexicon', quiet=True)
