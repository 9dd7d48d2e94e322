from __future__ import annotations

from fastapi import APIRouter, Depends

from schedulenest.api.auth import get_kv_store, require_system_code
from schedulenest.api.responses import mutation_response, new_entity_id, stored_payload, utcnow
from schedulenest.data import queries, repositories
from schedulenest.data.kv_store import KeyValueStore
from schedulenest.schemas import MutationResponse, Schedule, ScheduleCreate, SchedulePatch

router = APIRouter()


@router.post("/v1/schedules", status_code=201)
def create_schedule(
    payload: ScheduleCreate,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    schedule = Schedule(
        id=new_entity_id("schedule"),
        created_at=utcnow(),
        **payload.model_dump(),
    )
    mutation_response(repositories.add_schedule(store, system_code, schedule), "Document")
    return stored_payload(store, system_code, queries.find_schedule, schedule.id, schedule)


@router.patch("/v1/schedules/{schedule_id}", response_model=MutationResponse)
def patch_schedule(
    schedule_id: str,
    payload: SchedulePatch,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    return mutation_response(
        repositories.update_schedule(store, system_code, schedule_id, payload),
        "Schedule",
    )


@router.delete("/v1/schedules/{schedule_id}", response_model=MutationResponse)
def delete_schedule(
    schedule_id: str,
    system_code: str = Depends(require_system_code),
    store: KeyValueStore = Depends(get_kv_store),
):
    return mutation_response(repositories.delete_schedule(store, system_code, schedule_id), "Document")
