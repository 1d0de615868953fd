"""Tests for normalization, indexing, boolean search, scoring and ranking."""
import random
import threading
import time

import pytest

from src.matching.engine import RetrievalStrategy, SearchEngine
from src.matching.inverted_index import IndexField, InvertedIndex
from src.matching.normalizer import normalize, split_skills, tokenize
from src.matching.scorer import (
    Match,
    score_compatibility,
    score_skill_query,
    score_title_query,
)
from src.matching.topk import (
    RankingStrategy,
    bounded_top_k,
    full_sort,
    select_top_k,
)
from src.records.models import Job, Resume
from src.store.document_store import DocumentStore

SAMPLE_TEXTS = [
    "  Hello, World!  ",
    "C++ / C# developer",
    "Node.js, CI/CD; REST-APIs",
    "\tMachine   Learning\n",
    "...",
    "",
    "already normalized text",
]


# =============================================================================
# TextNormalizer
# =============================================================================


class TestNormalizer:
    """Tests for normalize and tokenize."""

    def test_normalize_basic(self):
        assert normalize("  Hello, World!  ") == "hello world"
        assert normalize("Node.js") == "nodejs"
        assert normalize("CI/CD") == "cicd"

    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_normalize_idempotent(self, text):
        once = normalize(text)
        assert normalize(once) == once

    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_normalize_trims_and_strips_punctuation(self, text):
        result = normalize(text)
        assert result == result.strip()
        assert not any(ch in result for ch in ",.!;/#+-")

    def test_normalize_keeps_inner_spaces(self):
        assert normalize("Machine Learning") == "machine learning"

    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_tokenize_never_yields_empty(self, text):
        assert all(token for token in tokenize(text))

    def test_tokenize(self):
        assert list(tokenize("Senior Data-Engineer, (Remote) - NYC")) == [
            "senior", "dataengineer", "remote", "nyc",
        ]

    def test_tokenize_is_restartable(self):
        text = "Python and SQL"
        assert list(tokenize(text)) == list(tokenize(text))

    def test_split_skills(self):
        assert split_skills(" Python ,, Machine Learning ,") == ["Python", "Machine Learning"]


# =============================================================================
# InvertedIndex
# =============================================================================


class TestInvertedIndex:
    """Tests for index construction and lookup."""

    def test_skill_phrases_are_atomic(self, job_store):
        index = InvertedIndex()
        index.build_index(job_store)
        skills = index.terms(IndexField.SKILLS)
        assert "machine learning" in skills
        assert "machine" not in skills
        assert index.lookup("Machine Learning", IndexField.SKILLS) == {0}

    def test_short_skill_phrases_kept(self):
        store = DocumentStore([Job(title="Analyst", skills="R, SQL")])
        index = InvertedIndex()
        index.build_index(store)
        assert index.lookup("R", IndexField.SKILLS) == {0}

    def test_single_character_tokens_dropped(self):
        store = DocumentStore([Job(title="C Developer", skills="Go")])
        index = InvertedIndex()
        index.build_index(store)
        assert "c" not in index.terms(IndexField.TITLE)
        assert "developer" in index.terms(IndexField.TITLE)

    def test_title_lookup_is_token_and(self, job_store):
        index = InvertedIndex()
        index.build_index(job_store)
        assert index.lookup("data", IndexField.TITLE) == {0, 2}
        assert index.lookup("Data Engineer", IndexField.TITLE) == {2}
        assert index.lookup("data wizard", IndexField.TITLE) == set()
        assert index.lookup("!!!", IndexField.TITLE) == set()

    def test_description_mapping(self, job_store):
        index = InvertedIndex()
        index.build_index(job_store)
        assert index.lookup("requiring docker", IndexField.DESCRIPTION) == {1, 4}

    def test_resumes_have_empty_title_mapping(self, resume_store):
        index = InvertedIndex()
        index.build_index(resume_store)
        assert index.terms(IndexField.TITLE) == frozenset()
        assert index.terms(IndexField.SKILLS) == frozenset(["python", "sql", "java", "docker"])

    def test_build_is_idempotent(self, job_store):
        index = InvertedIndex()
        index.build_index(job_store)
        first = {f: dict(index.postings(f)) for f in IndexField}
        index.build_index(job_store)
        second = {f: dict(index.postings(f)) for f in IndexField}
        assert first == second

    def test_build_skipped_when_built(self, job_store):
        index = InvertedIndex()
        index.build_index(job_store)
        job_store.insert(Job(title="Rust Engineer", skills="Rust"))
        index.build_index(job_store)
        assert index.lookup("rust", IndexField.SKILLS) == set()
        assert index.is_stale(job_store)

    def test_invalidate_forces_full_rebuild(self, job_store):
        index = InvertedIndex()
        index.build_index(job_store)
        job_store.remove(0)
        index.invalidate()
        index.build_index(job_store)
        assert "machine learning" not in index.terms(IndexField.SKILLS)
        assert index.lookup("python", IndexField.SKILLS) == {1, 3}
        assert not index.is_stale(job_store)

    def test_lookup_returns_copy(self, job_store):
        index = InvertedIndex()
        index.build_index(job_store)
        index.lookup("python", IndexField.SKILLS).add(99)
        assert 99 not in index.lookup("python", IndexField.SKILLS)


# =============================================================================
# QueryEvaluator
# =============================================================================


class TestBooleanSearch:
    """Tests for the skill query language."""

    def test_query_builds_index_implicitly(self, job_engine):
        assert job_engine.index.built is False
        assert job_engine.evaluator.boolean_search("Python") == {0, 2, 4}
        assert job_engine.index.built is True

    def test_exact_phrase_not_prefix(self, job_engine):
        assert job_engine.evaluator.boolean_search("Java") == {1}

    def test_comma_is_union(self, job_engine):
        evaluator = job_engine.evaluator
        combined = evaluator.boolean_search("Python, Docker")
        assert combined == evaluator.boolean_search("Python") | evaluator.boolean_search("Docker")
        assert combined == {0, 1, 2, 4}

    def test_or_operator(self, job_engine):
        assert job_engine.evaluator.boolean_search("React or Java") == {1, 3}

    def test_chained_or_only_splits_once(self, job_engine):
        # "java or react" is looked up as a single phrase and finds nothing
        assert job_engine.evaluator.boolean_search("Python or Java or React") == {0, 2, 4}

    def test_unknown_skill(self, job_engine):
        assert job_engine.evaluator.boolean_search("Cobol") == set()
        assert job_engine.evaluator.boolean_search(",,") == set()

    def test_phrase_matches_linear_scan(self, sample_jobs, job_engine):
        phrases = {s for job in sample_jobs for s in split_skills(job.skills)}
        for phrase in phrases:
            expected = {
                doc_id
                for doc_id, job in enumerate(sample_jobs)
                if normalize(phrase) in {normalize(s) for s in split_skills(job.skills)}
            }
            assert job_engine.evaluator.boolean_search(phrase) == expected, phrase

    def test_title_search(self, job_engine):
        assert job_engine.evaluator.title_search("engineer") == {1, 2, 4}

    def test_concurrent_first_queries_build_once(self, job_engine, monkeypatch):
        """Threads racing on an unbuilt index share a single build."""
        index = job_engine.index
        real_build = index.build_index
        builds = []

        def slow_build(store):
            builds.append(store.version)
            time.sleep(0.05)  # widen the window for a second builder
            real_build(store)

        monkeypatch.setattr(index, "build_index", slow_build)

        n_threads = 8
        barrier = threading.Barrier(n_threads)
        results = [None] * n_threads

        def worker(i):
            barrier.wait()
            results[i] = job_engine.evaluator.boolean_search("Python")

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(n_threads)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert len(builds) == 1
        assert results == [{0, 2, 4}] * n_threads


# =============================================================================
# Scorer
# =============================================================================


class TestScoring:
    """Tests for the additive scoring rules."""

    def test_single_skill_score(self):
        resume = Resume(skills="Python, SQL")
        # +10 skills, +5 summary, +2 word in skills
        assert score_skill_query("Python", resume) == 17

    def test_comma_query_score(self):
        resume = Resume(skills="Python, SQL")
        assert score_skill_query("Python, SQL", resume) == 30
        assert score_skill_query("Python, Rust", resume) == 15

    def test_no_overlap_scores_zero(self):
        assert score_skill_query("Rust", Resume(skills="Java")) == 0
        assert score_skill_query("   ", Resume(skills="Java")) == 0

    def test_title_score(self, sample_jobs):
        # +20 title, +10 text, +5/+2 per word for "data" and "engineer"
        assert score_title_query("data engineer", sample_jobs[2]) == 44

    def test_compatibility(self):
        job = Job(title="Dev", skills="Python, Docker")
        assert score_compatibility(job, Resume(skills="Python, Docker")) == 10
        assert score_compatibility(job, Resume(skills="Python, SQL")) == 5
        assert score_compatibility(job, Resume(skills="Java")) == 0

    def test_compatibility_whitespace_skills(self):
        job = Job(title="Dev", skills="Python Docker")
        assert score_compatibility(job, Resume(skills="Docker")) == 5

    def test_compatibility_skips_connective_words(self):
        # "a" and "for" would otherwise match inside "java" and "platform"
        job = Job(title="Dev", skills="Docker for a team")
        assert score_compatibility(job, Resume(skills="Java")) == 0
        assert score_compatibility(job, Resume(skills="Platform, Docker")) == 5

    def test_compatibility_ignores_placeholder_skills(self):
        assert score_compatibility(Job(title="Dev"), Resume()) == 0


# =============================================================================
# TopKSelector
# =============================================================================


def _random_matches(seed: int, n: int) -> list[Match]:
    rng = random.Random(seed)
    ids = rng.sample(range(n * 3), n)
    # Narrow score range to force ties
    return [Match(doc_id=i, score=rng.randint(1, 6)) for i in ids]


class TestTopK:
    """Tests for ranking strategies."""

    def test_full_sort_order(self):
        matches = [Match(3, 10), Match(1, 10), Match(2, 20), Match(0, 5)]
        assert full_sort(matches) == [Match(2, 20), Match(1, 10), Match(3, 10), Match(0, 5)]

    @pytest.mark.parametrize("seed", range(5))
    def test_bounded_prefix_equals_full_sort(self, seed):
        matches = _random_matches(seed, 25)
        ranked = full_sort(matches)
        for k in range(len(matches) + 1):
            assert bounded_top_k(list(matches), k) == ranked[:k]

    def test_k_covering_everything_is_ordered(self):
        matches = _random_matches(42, 8)
        assert bounded_top_k(matches, 50) == full_sort(matches)

    def test_bounded_does_not_mutate_input(self):
        matches = [Match(0, 1), Match(1, 5), Match(2, 3)]
        snapshot = list(matches)
        bounded_top_k(matches, 1)
        assert matches == snapshot

    def test_select_top_k_strategies_agree(self):
        matches = _random_matches(7, 30)
        for k in (None, 0, 1, 5, 30):
            assert select_top_k(matches, k, RankingStrategy.FULL_SORT) == select_top_k(
                matches, k, RankingStrategy.TOP_K
            )

    def test_empty(self):
        assert select_top_k([], 5) == []


# =============================================================================
# SearchEngine
# =============================================================================


class TestSearchEngine:
    """Tests for the composed search pipeline."""

    def test_python_scenario(self, resume_engine):
        assert resume_engine.candidates("Python") == {0, 2}
        results = resume_engine.search("Python")
        assert [m.doc_id for m in results] == [0, 2]
        assert all(m.score >= 10 for m in results)

    def test_max_results(self, job_engine):
        results = job_engine.search("Python", max_results=2)
        assert len(results) == 2
        assert [m.doc_id for m in results] == [0, 2]

    def test_no_matches_is_empty(self, job_engine):
        assert job_engine.search("Cobol") == []

    def test_search_by_title_tie_break(self, job_engine):
        results = job_engine.search_by_title("engineer")
        assert [m.doc_id for m in results] == [1, 2, 4]
        assert len({m.score for m in results}) == 1

    def test_scan_strategy_same_contract(self, resume_store):
        indexed = SearchEngine(resume_store, retrieval=RetrievalStrategy.INDEXED)
        scan = SearchEngine(resume_store, retrieval="scan")
        assert scan.search("Python") == indexed.search("Python")
        assert scan.search("Rust") == []
        assert scan.index.built is False

    @pytest.mark.parametrize("ranking", list(RankingStrategy))
    def test_ranking_strategies(self, job_store, ranking):
        engine = SearchEngine(job_store, ranking=ranking)
        assert [m.doc_id for m in engine.search("Python, Docker", 3)] == [4, 0, 1]

    def test_insert_after_build_is_searchable(self, job_engine):
        job_engine.ensure_indexed()
        job_engine.insert(Job(title="Systems Programmer", skills="Rust"))
        assert [m.doc_id for m in job_engine.search("Rust")] == [5]

    def test_remove_invalidates_index(self, job_engine):
        job_engine.ensure_indexed()
        assert job_engine.remove(0) is True
        assert job_engine.index.built is False
        assert {m.doc_id for m in job_engine.search("Python")} == {1, 3}

    def test_remove_invalid_id(self, job_engine):
        job_engine.ensure_indexed()
        assert job_engine.remove(42) is False
        assert job_engine.index.built is True

    def test_custom_scorer(self, resume_store):
        class FlatScorer:
            def score(self, query, record):
                return 1

        engine = SearchEngine(resume_store, skill_scorer=FlatScorer())
        assert engine.search("Python") == [Match(0, 1), Match(2, 1)]
