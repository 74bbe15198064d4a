"""Tests for utils.text — edit distance, prompt similarity, Jaccard index."""

from quiz_integrity.utils.text import edit_distance, jaccard_index, prompt_similarity


class TestEditDistance:
    def test_identical(self):
        assert edit_distance("kitten", "kitten") == 0

    def test_classic_example(self):
        assert edit_distance("kitten", "sitting") == 3

    def test_against_empty(self):
        assert edit_distance("", "abc") == 3
        assert edit_distance("abc", "") == 3

    def test_counts_code_points_not_bytes(self):
        # Thai characters are 3 bytes each in UTF-8; one substitution
        assert edit_distance("ดาว", "ดาร") == 1

    def test_bounded_by_longest(self):
        pairs = [("abc", "xyz"), ("short", "a much longer string"), ("", ""), ("ab", "ba")]
        for a, b in pairs:
            assert 0 <= edit_distance(a, b) <= max(len(a), len(b))


class TestPromptSimilarity:
    def test_both_empty_is_one(self):
        assert prompt_similarity("", "") == 1.0

    def test_self_similarity(self):
        assert prompt_similarity("What is 2+2?", "What is 2+2?") == 1.0

    def test_spacing_variant(self):
        # two inserted spaces over a 14-char prompt
        score = prompt_similarity("What is 2+2?", "What is 2 + 2?")
        assert abs(score - (1 - 2 / 14)) < 1e-9
        assert score >= 0.85

    def test_completely_different(self):
        assert prompt_similarity("abc", "xyz") == 0.0

    def test_symmetric(self):
        a, b = "Which planet is largest?", "Which planet is the largest?"
        assert prompt_similarity(a, b) == prompt_similarity(b, a)

    def test_in_unit_interval(self):
        for a, b in [("a", ""), ("abc", "abd"), ("ดาวเคราะห์", "ดาวฤกษ์")]:
            assert 0.0 <= prompt_similarity(a, b) <= 1.0


class TestJaccardIndex:
    def test_identical_sets(self):
        assert jaccard_index({"3", "4", "5"}, {"5", "4", "3"}) == 1.0

    def test_partial_overlap(self):
        # {3,4,5} & {3,4,6} = {3,4}; union has 4 -> 0.5
        assert jaccard_index({"3", "4", "5"}, {"3", "4", "6"}) == 0.5

    def test_disjoint(self):
        assert jaccard_index({"a"}, {"b"}) == 0.0

    def test_both_empty_is_one(self):
        assert jaccard_index(set(), set()) == 1.0

    def test_one_empty(self):
        assert jaccard_index({"a"}, set()) == 0.0

    def test_exact_string_match(self):
        assert jaccard_index({"Earth"}, {"earth"}) == 0.0

    def test_symmetric(self):
        a, b = frozenset({"x", "y", "z"}), frozenset({"y", "z", "w", "v"})
        assert jaccard_index(a, b) == jaccard_index(b, a)
