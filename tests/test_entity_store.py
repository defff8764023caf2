"""
Entity store: ids, timestamps, foreign-key listing and verbatim JSON fields.
"""
import pytest

from interpretlab.core.errors import NotFound
from interpretlab.models.enums import EntityType

from .fixtures import NESTED_MAP


def _model_fields(**overrides):
    fields = dict(
        name="m", description=None, model_type="deep_learning", framework="pytorch",
        file_path="/m.pt", file_size=10, status="uploading", metadata_=None,
    )
    fields.update(overrides)
    return fields


class TestCreate:

    def test_assigns_id_and_equal_timestamps(self, run_scenario):
        async def scenario(service):
            return await service.store.create(EntityType.MODEL, **_model_fields())

        model = run_scenario(scenario)
        assert model.id > 0
        assert model.created_at == model.updated_at

    def test_visualization_has_no_updated_at(self, run_scenario):
        async def scenario(service):
            store = service.store
            return await store.create(
                EntityType.VISUALIZATION, analysis_id=1, chart_type="heatmap", config={}, data={}
            )

        visualization = run_scenario(scenario)
        assert visualization.created_at is not None
        assert not hasattr(visualization, "updated_at")

    def test_opaque_map_round_trip(self, run_scenario):
        async def scenario(service):
            store = service.store
            created = await store.create(EntityType.MODEL, **_model_fields(metadata_=NESTED_MAP))
            store.db.expunge_all()
            return await store.get_by_id(EntityType.MODEL, created.id)

        model = run_scenario(scenario)
        assert model.metadata_ == NESTED_MAP


class TestRead:

    def test_get_missing_returns_none(self, run_scenario):
        async def scenario(service):
            return await service.store.get_by_id(EntityType.DATASET, 42)

        assert run_scenario(scenario) is None

    def test_list_is_ordered_by_id(self, run_scenario):
        async def scenario(service):
            store = service.store
            for name in ["c", "a", "b"]:
                await store.create(EntityType.MODEL, **_model_fields(name=name))
            return await store.list(EntityType.MODEL)

        models = run_scenario(scenario)
        assert [m.name for m in models] == ["c", "a", "b"]
        assert [m.id for m in models] == sorted(m.id for m in models)

    def test_list_filters_skip_none(self, run_scenario):
        async def scenario(service):
            store = service.store
            await store.create(EntityType.MODEL, **_model_fields(status="ready"))
            await store.create(EntityType.MODEL, **_model_fields(status="error"))
            return (
                await store.list(EntityType.MODEL, status="ready"),
                await store.list(EntityType.MODEL, status=None),
            )

        ready, everything = run_scenario(scenario)
        assert [m.status for m in ready] == ["ready"]
        assert len(everything) == 2

    def test_list_by_foreign_key(self, run_scenario):
        async def scenario(service):
            store = service.store
            for analysis_id in [1, 2, 1]:
                await store.create(
                    EntityType.VISUALIZATION, analysis_id=analysis_id,
                    chart_type="bar_chart", config={}, data={},
                )
            return (
                await store.list_by_foreign_key(EntityType.VISUALIZATION, "analysis_id", 1),
                await store.list_by_foreign_key(EntityType.VISUALIZATION, "analysis_id", 99),
            )

        matching, none = run_scenario(scenario)
        assert [v.analysis_id for v in matching] == [1, 1]
        assert none == []

    def test_list_by_unknown_foreign_key_is_rejected(self, run_scenario):
        async def scenario(service):
            return await service.store.list_by_foreign_key(EntityType.ANALYSIS, "name", "x")

        with pytest.raises(ValueError):
            run_scenario(scenario)

    def test_count_by_status(self, run_scenario):
        async def scenario(service):
            store = service.store
            for status in ["ready", "ready", "error"]:
                await store.create(EntityType.MODEL, **_model_fields(status=status))
            return await store.count_by_status(EntityType.MODEL)

        assert run_scenario(scenario) == {"ready": 2, "error": 1}


class TestUpdate:

    def test_missing_id_raises_not_found(self, run_scenario):
        async def scenario(service):
            return await service.store.update(EntityType.ANALYSIS, 7, status="running")

        with pytest.raises(NotFound) as exc:
            run_scenario(scenario)
        assert exc.value.entity == "analysis"
        assert exc.value.id == 7

    def test_updated_at_strictly_increases(self, run_scenario):
        async def scenario(service):
            store = service.store
            model = await store.create(EntityType.MODEL, **_model_fields())
            stamps = [model.updated_at]
            for status in ["processing", "processing", "ready"]:
                model = await store.update(EntityType.MODEL, model.id, status=status)
                stamps.append(model.updated_at)
            return model, stamps

        model, stamps = run_scenario(scenario)
        assert all(later > earlier for earlier, later in zip(stamps, stamps[1:]))
        assert model.created_at == stamps[0]

    def test_visualizations_are_immutable(self, run_scenario):
        async def scenario(service):
            store = service.store
            visualization = await store.create(
                EntityType.VISUALIZATION, analysis_id=1, chart_type="bar_chart", config={}, data={}
            )
            return await store.update(EntityType.VISUALIZATION, visualization.id, data={"x": 1})

        with pytest.raises(ValueError):
            run_scenario(scenario)
