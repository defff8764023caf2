"""
Status machines and apply_status payload semantics.
"""
import pytest

from interpretlab.core.errors import InvalidStatusTransition, NotFound, ValidationError
from interpretlab.models.enums import AnalysisStatus, AssetStatus, EntityType
from interpretlab.services.status_machine import (
    UNSET, LifecycleStatusMachine, PermissiveStatusMachine, apply_status, get_status_machine
)

from .fixtures import analysis_input, dataset_input, model_input


class TestPermissiveMachine:

    @pytest.mark.parametrize("entity_type", [EntityType.MODEL, EntityType.DATASET])
    def test_every_asset_status_reachable_from_every_status(self, entity_type):
        machine = PermissiveStatusMachine()
        for current in AssetStatus:
            for target in AssetStatus:
                machine.check(entity_type, current.value, target.value)

    def test_analysis_can_go_back_from_completed(self):
        machine = PermissiveStatusMachine()
        machine.check(EntityType.ANALYSIS, "completed", "pending")
        assert machine.allowed_targets(EntityType.ANALYSIS, "completed") == {s.value for s in AnalysisStatus}

    def test_undeclared_status_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            PermissiveStatusMachine().check(EntityType.ANALYSIS, "pending", "uploading")
        assert exc.value.field == "status"
        assert not isinstance(exc.value, InvalidStatusTransition)

    def test_visualizations_have_no_status(self):
        with pytest.raises(ValidationError):
            PermissiveStatusMachine().check(EntityType.VISUALIZATION, "", "ready")


class TestLifecycleMachine:

    @pytest.mark.parametrize("current,target", [
        ("uploading", "processing"),
        ("uploading", "ready"),
        ("processing", "error"),
        ("error", "processing"),
        ("ready", "processing"),
        ("ready", "ready"),
    ])
    def test_allowed_asset_moves(self, current, target):
        LifecycleStatusMachine().check(EntityType.DATASET, current, target)

    @pytest.mark.parametrize("current,target", [
        ("ready", "uploading"),
        ("error", "ready"),
        ("processing", "uploading"),
    ])
    def test_rejected_asset_moves(self, current, target):
        with pytest.raises(InvalidStatusTransition) as exc:
            LifecycleStatusMachine().check(EntityType.MODEL, current, target)
        assert exc.value.to_dict()["current"] == current
        assert exc.value.to_dict()["target"] == target

    def test_completed_analysis_cannot_return_to_pending(self):
        machine = LifecycleStatusMachine()
        machine.check(EntityType.ANALYSIS, "pending", "running")
        machine.check(EntityType.ANALYSIS, "running", "completed")
        with pytest.raises(InvalidStatusTransition):
            machine.check(EntityType.ANALYSIS, "completed", "pending")


def test_get_status_machine_by_name():
    assert isinstance(get_status_machine("permissive"), PermissiveStatusMachine)
    assert isinstance(get_status_machine("lifecycle"), LifecycleStatusMachine)
    with pytest.raises(ValueError):
        get_status_machine("strict")


class TestApplyStatus:

    def test_omitted_payload_keeps_value(self, run_scenario):
        async def scenario(service):
            model = await service.create_model(model_input(metadata={"version": "1.0"}))
            return await apply_status(
                service.store, PermissiveStatusMachine(), EntityType.MODEL, model.id, "processing"
            )

        model = run_scenario(scenario)
        assert model.status == "processing"
        assert model.metadata_ == {"version": "1.0"}

    def test_explicit_none_clears_value(self, run_scenario):
        async def scenario(service):
            model = await service.create_model(model_input(metadata={"version": "1.0"}))
            return await apply_status(
                service.store, PermissiveStatusMachine(), EntityType.MODEL, model.id, "ready", None
            )

        assert run_scenario(scenario).metadata_ is None

    def test_map_replaces_without_merging(self, run_scenario):
        async def scenario(service):
            dataset = await service.create_dataset(dataset_input(metadata={"a": 1, "b": {"c": 2}}))
            return await apply_status(
                service.store, PermissiveStatusMachine(), EntityType.DATASET, dataset.id,
                "ready", {"b": {"d": 3}},
            )

        assert run_scenario(scenario).metadata_ == {"b": {"d": 3}}

    def test_analysis_payload_is_results(self, run_scenario):
        async def scenario(service):
            model = await service.create_model(model_input())
            dataset = await service.create_dataset(dataset_input())
            analysis = await service.create_analysis(analysis_input(model.id, dataset.id))
            return await apply_status(
                service.store, PermissiveStatusMachine(), EntityType.ANALYSIS, analysis.id,
                AnalysisStatus.COMPLETED, {"importances": {"age": 0.7}},
            )

        analysis = run_scenario(scenario)
        assert analysis.status == "completed"
        assert analysis.results == {"importances": {"age": 0.7}}
        assert analysis.parameters == {"top_k": 5}

    def test_unknown_id_is_not_found(self, run_scenario):
        async def scenario(service):
            return await apply_status(
                service.store, PermissiveStatusMachine(), EntityType.DATASET, 404, "ready", UNSET
            )

        with pytest.raises(NotFound) as exc:
            run_scenario(scenario)
        assert exc.value.to_dict() == {"kind": "not_found", "entity": "dataset", "id": 404}

    def test_undeclared_status_checked_before_lookup(self, run_scenario):
        async def scenario(service):
            return await apply_status(
                service.store, PermissiveStatusMachine(), EntityType.ANALYSIS, 404, "uploading"
            )

        with pytest.raises(ValidationError) as exc:
            run_scenario(scenario)
        assert exc.value.field == "status"
        assert not isinstance(exc.value, NotFound)

    def test_rejected_transition_writes_nothing(self, run_scenario):
        async def scenario(service):
            model = await service.create_model(model_input())
            machine = LifecycleStatusMachine()
            await apply_status(service.store, machine, EntityType.MODEL, model.id, "ready")
            before = model.updated_at
            try:
                await apply_status(service.store, machine, EntityType.MODEL, model.id, "uploading", None)
            except InvalidStatusTransition:
                pass
            fresh = await service.get_model_by_id(model.id)
            return fresh, before

        model, before = run_scenario(scenario)
        assert model.status == "ready"
        assert model.metadata_ == {"version": "1.0"}
        assert model.updated_at == before
