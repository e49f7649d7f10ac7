"""
Deck Tracker - Fuzzy Matcher Tests
Tests for the tiered name cascade, stopword stripping and suggestions
"""
import pytest


def build_matcher(groups):
    from card_catalog import CardCatalog
    from fuzzy_matcher import FuzzyCardMatcher
    return FuzzyCardMatcher(CardCatalog.from_dict(groups))


def card(name, alternatives=None):
    data = {'name': name, 'image': f'https://example.com/{name}.png'}
    if alternatives:
        data['alternatives'] = alternatives
    return data


class TestExactTiers:
    """Tests for exact name and alternative matches"""

    def test_exact_name_case_insensitive(self, matcher):
        """Test exact match regardless of case"""
        assert matcher.find_best_match('mega knight').name == 'Mega Knight'
        assert matcher.find_best_match('MEGA KNIGHT').name == 'Mega Knight'

    def test_exact_name_beats_earlier_substring(self, matcher):
        """Test exact tier wins over a substring hit earlier in the catalog"""
        # "Knight" comes before "Mega Knight" and is a substring of the input
        assert matcher.find_best_match('Mega Knight').name == 'Mega Knight'

    def test_exact_alternative(self, matcher):
        """Test spoken synonym"""
        assert matcher.find_best_match('skarmy').name == 'Skeleton Army'
        assert matcher.find_best_match('PEKKA').name == 'P.E.K.K.A'

    def test_exact_name_beats_alternative(self):
        """Test a card name wins over another card's identical synonym"""
        matcher = build_matcher({
            '1': [card('Spirit Healer', ['heal'])],
            '2': [card('Heal')],
        })

        assert matcher.find_best_match('heal').name == 'Heal'

    def test_surrounding_whitespace_ignored(self, matcher):
        """Test padded input"""
        assert matcher.find_best_match('  zap ').name == 'Zap'


class TestSubstringTiers:
    """Tests for bidirectional substring matches"""

    def test_spoken_contains_name(self, matcher):
        """Test input longer than the card name"""
        assert matcher.find_best_match('hog rider card').name == 'Hog Rider'

    def test_name_contains_spoken(self, matcher):
        """Test partial name"""
        assert matcher.find_best_match('goblin').name == 'Goblin Barrel'

    def test_first_hit_in_catalog_order(self):
        """Test ties resolve by catalog order"""
        matcher = build_matcher({
            '4': [card('Hog Rider')],
            '5': [card('Ram Rider')],
        })

        assert matcher.find_best_match('rider').name == 'Hog Rider'

    def test_name_substring_beats_alternative_substring(self):
        """Test name substring (tier 3) wins over alternative substring (tier 4)"""
        matcher = build_matcher({
            '1': [card('Ice Spirit', ['frosty wizard'])],
            '5': [card('Ice Wizard')],
        })

        assert matcher.find_best_match('wizard').name == 'Ice Wizard'

    def test_alternative_substring(self, matcher):
        """Test substring on a synonym"""
        assert matcher.find_best_match('hog please').name == 'Hog Rider'


class TestStopwordTier:
    """Tests for the stopword-stripped tier"""

    def test_the_knight_prefers_knight(self):
        """Test "the knight" resolves to Knight over Another Knight"""
        matcher = build_matcher({
            '3': [card('Another Knight'), card('Knight')],
        })

        assert matcher.find_best_match('the knight').name == 'Knight'

    def test_stopword_inside_name(self):
        """Test stripping lets a dropped article still match"""
        matcher = build_matcher({
            '4': [card('Knight of the Realm')],
        })

        assert matcher.find_best_match('knight of realm').name == 'Knight of the Realm'

    def test_strip_keeps_words_containing_stopwords(self, matcher):
        """Test word-boundary removal"""
        assert matcher.strip_stopwords('another knight') == 'another knight'
        assert matcher.strip_stopwords('the knight') == 'knight'
        assert matcher.strip_stopwords('A Theater An Anvil') == 'theater anvil'

    def test_strip_keeps_letters_between_punctuation(self, matcher):
        """Test only whitespace separates stopwords"""
        assert matcher.strip_stopwords('p.e.k.k.a') == 'p.e.k.k.a'
        assert matcher.strip_stopwords('the p.e.k.k.a') == 'p.e.k.k.a'
        assert matcher.strip_stopwords('zzz-not-a-card') == 'zzz-not-a-card'

    def test_only_stopwords_never_matches(self):
        """Test input that strips to nothing"""
        matcher = build_matcher({'3': [card('Knight')]})

        assert matcher.find_best_match('the') is None
        assert matcher.find_best_match('a an the') is None


class TestNoMatch:
    """Tests for misses"""

    def test_unknown_text(self, matcher):
        """Test text unrelated to any card"""
        assert matcher.find_best_match('zzz-not-a-card') is None

    @pytest.mark.parametrize('text', ['', '   ', None])
    def test_empty_text(self, matcher, text):
        """Test empty input never matches"""
        assert matcher.find_best_match(text) is None

    def test_empty_catalog(self):
        """Test a matcher over an empty catalog always misses"""
        from card_catalog import CardCatalog
        from fuzzy_matcher import FuzzyCardMatcher

        matcher = FuzzyCardMatcher(CardCatalog())

        assert matcher.find_best_match('knight') is None
        assert matcher.get_suggestions('knight') == []


class TestSuggestions:
    """Tests for spelling suggestions"""

    def test_suggests_close_name(self, matcher):
        """Test a misspelled name"""
        assert matcher.get_suggestions('musketer') == ['Musketeer']

    def test_suggestion_from_alternative_uses_card_name(self, matcher):
        """Test synonym hits are reported under the card name"""
        assert matcher.get_suggestions('pekk') == ['P.E.K.K.A']

    def test_no_suggestions_for_distant_text(self, matcher):
        """Test unrelated text"""
        assert matcher.get_suggestions('zzz-not-a-card') == []

    def test_suggestions_limited(self):
        """Test max_results cap"""
        matcher = build_matcher({'1': [card('Bat'), card('Cat'), card('Hat'), card('Rat')]})

        assert len(matcher.get_suggestions('mat', max_results=2)) == 2
