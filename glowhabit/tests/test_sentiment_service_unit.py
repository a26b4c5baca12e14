import pytest

from glowhabit.services.sentiment_service import SentimentService


class TestSentimentServiceUnit:

    @pytest.mark.parametrize('text', ['', '   ', None])
    def test_blank_text_is_neutral(self, text, lexicon):
        result = SentimentService.analyze(text, lexicon=lexicon)
        assert result.score == 0
        assert result.label == 'neutral'
        assert result.confidence == 'low'
        assert result.emotions == []

    def test_blank_results_are_independent(self, lexicon):
        first = SentimentService.analyze("", lexicon=lexicon)
        first.emotions.append('happy')
        first.positive_words.append('great')

        second = SentimentService.analyze("   ", lexicon=lexicon)
        assert second.emotions == []
        assert second.positive_words == []
        assert second is not first

    def test_positive_text(self, lexicon):
        result = SentimentService.analyze("I feel happy and great today", lexicon=lexicon)
        # (2.7 + 3.1) / 6 tokens * 50 = 48.3
        assert result.score == 48
        assert result.label == 'positive'
        assert result.confidence == 'low'  # fewer than 10 words
        assert result.emotions == ['happy']
        assert result.positive_words == ['happy', 'great']

    def test_negative_text(self, lexicon):
        result = SentimentService.analyze("This was a bad and awful day", lexicon=lexicon)
        assert result.score == -32
        assert result.label == 'negative'

    def test_negation(self, lexicon):
        result = SentimentService.analyze("I am not happy", lexicon=lexicon)
        assert result.label == 'negative'
        assert result.negative_words == ['happy']

    def test_score_is_clamped(self, lexicon):
        result = SentimentService.analyze("love love", lexicon=lexicon)
        assert result.score == 100

    def test_small_score_is_neutral(self, lexicon):
        result = SentimentService.analyze("today i went to the store and it was good", lexicon=lexicon)
        # 1.9 / 10 * 50 = 9.5, inside the neutral band
        assert result.label == 'neutral'
        assert result.confidence == 'medium'

    def test_high_confidence(self, lexicon):
        result = SentimentService.analyze(
            "happy great good love wonderful day with my family today", lexicon=lexicon
        )
        assert result.confidence == 'high'

    def test_default_lexicon_is_loaded(self, patched_lexicon):
        result = SentimentService.analyze("what a wonderful morning")
        assert result.label == 'positive'
        patched_lexicon.assert_called_once()

    def test_empty_lexicon_scores_neutral(self):
        result = SentimentService.analyze("what a wonderful morning", lexicon={})
        assert result.score == 0
        assert result.label == 'neutral'

    @pytest.mark.parametrize('label, score, expected', [
        ('positive', 80, 'great'),
        ('positive', 50, 'great'),
        ('positive', 40, 'good'),
        ('neutral', 0, 'okay'),
        ('negative', -20, 'low'),
        ('negative', -50, 'rough'),
        ('negative', -80, 'rough'),
    ])
    def test_mood_from_sentiment(self, label, score, expected):
        assert SentimentService.mood_from_sentiment(label, score) == expected

    def test_to_sentiment_data(self, lexicon):
        result = SentimentService.analyze("I feel happy and great today", lexicon=lexicon)
        data = SentimentService.to_sentiment_data(result, analyzed_at='2025-01-15T09:00:00.000Z')
        assert data.score == 48
        assert data.label == 'positive'
        assert data.emotions == ['happy']
        assert data.analyzed_at == '2025-01-15T09:00:00.000Z'
