"""Tests for ConceptDevelopmentService."""

import pytest

from greenlight.development import ConceptDevelopmentService, InMemoryVersionStore, JsonVersionStore, Winner


@pytest.fixture
def store():
    return InMemoryVersionStore()


@pytest.fixture
def service(analyzer, store, settings):
    return ConceptDevelopmentService(analyzer=analyzer, store=store, settings=settings)


class TestConstruction:
    """Test service defaults."""

    def test_json_store_from_settings(self, settings, analyzer):
        """Test the default store writes under settings.history_dir."""
        service = ConceptDevelopmentService(analyzer=analyzer, settings=settings)

        assert isinstance(service.history.store, JsonVersionStore)
        assert service.history.store.history_dir == settings.history_dir
        assert service.history.timeout == settings.history_timeout

    def test_analyzer_from_settings(self, settings):
        """Test an analyzer is built when none is given."""
        service = ConceptDevelopmentService(settings=settings)

        assert service.analyzer.settings is settings


class TestVersioning:
    """Test saving and reading history through the service."""

    @pytest.mark.asyncio
    async def test_save_runs_analysis(self, service, store, thriller_concept):
        """Test a missing result is computed with the given seed."""
        version = await service.save_version("heist", thriller_concept, change_description="Draft", seed=3)

        expected = service.analyzer.analyze(thriller_concept, seed=3)
        assert version.greenlight_score == expected.greenlight_score
        assert version.change_description == "Draft"
        assert store.project_ids() == ["heist"]

    @pytest.mark.asyncio
    async def test_history_and_progression(self, service, thriller_concept):
        """Test versions and progression come back in order."""
        await service.save_version("heist", thriller_concept, seed=1)
        await service.save_version("heist", thriller_concept.with_changes(genre="Horror"), seed=1)

        versions = await service.get_version_history("heist")
        progression = await service.get_score_progression("heist")

        assert [v.version_number for v in versions] == [1, 2]
        assert [p['version'] for p in progression] == [1, 2]
        assert progression[1]['delta'] == versions[1].greenlight_score - versions[0].greenlight_score

    @pytest.mark.asyncio
    async def test_unknown_project(self, service):
        """Test an unknown project has no history."""
        assert await service.get_version_history("nobody") == []
        assert await service.get_score_progression("nobody") == []


class TestComparison:
    """Test A/B comparison through the service."""

    def test_same_seed_for_both(self, service, thriller_concept, full_concept):
        """Test both versions are analyzed with one seed."""
        comparison = service.compare_ab(thriller_concept, full_concept, seed=8)

        assert comparison.version_a.seed == 8
        assert comparison.version_b.seed == 8
        assert comparison.winner == Winner.B

    def test_identical_versions_tie(self, service, thriller_concept):
        """Test a concept compared with itself ties."""
        comparison = service.compare_ab(thriller_concept, thriller_concept, seed=8)

        assert comparison.winner == Winner.TIE
        assert comparison.score_difference == 0

    @pytest.mark.asyncio
    async def test_compare_with_delay(self, service, thriller_concept, full_concept):
        """Test the async comparison matches the sync one."""
        delayed = await service.compare_ab_with_delay(thriller_concept, full_concept, seed=8)
        direct = service.compare_ab(thriller_concept, full_concept, seed=8)

        assert delayed.winner == direct.winner
        assert delayed.score_difference == direct.score_difference


class TestScenariosAndRewrites:
    """Test what-if, rewrites and fixes through the service."""

    def test_what_if(self, service, thriller_concept):
        """Test scenarios share the baseline seed."""
        scenarios = service.what_if(thriller_concept, seed=4)

        assert scenarios
        assert all(s.projected_result.seed == 4 for s in scenarios)

    def test_suggest_rewrites_reproducible(self, service, thriller_concept):
        """Test seeded rewrites repeat exactly."""
        first = service.suggest_rewrites(thriller_concept, seed=6)
        second = service.suggest_rewrites(thriller_concept, seed=6)

        assert first == second
        assert first[-1].focus_area == 'comprehensive'

    def test_suggest_rewrites_from_result(self, service, thriller_concept):
        """Test an existing analysis supplies the breakdown."""
        result = service.analyzer.analyze(thriller_concept, seed=1)

        suggestions = service.suggest_rewrites(thriller_concept, result=result, seed=6)

        assert suggestions == service.suggest_rewrites(thriller_concept, seed=6)

    def test_weakness_fixes(self, service, thriller_concept):
        """Test fixes come back most urgent first."""
        fixes = service.weakness_fixes(service.analyzer.analyze(thriller_concept, seed=1))

        assert fixes
        assert fixes[0].priority_level == min(f.priority_level for f in fixes)
