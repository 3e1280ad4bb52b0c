# storefront/routers/content.py
# Site content endpoints: gallery, stories, team, journey, programs, settings
# and contact messages.

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import Table, delete, insert, select, update

from storefront.database import Database, get_db
from storefront.models import gallery, journey, messages, programs, settings, stories, team
from storefront.schemas import (
    GalleryIn,
    JourneyIn,
    MessageIn,
    ProgramIn,
    SettingIn,
    StoryIn,
    TeamMemberIn,
)
from storefront.utils import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["content"])

DELETED = {"message": "success"}


# ----------------- Helpers ----------------- #
def _create(db: Database, table: Table, values: dict) -> dict:
    return db.execute(insert(table).values(**values).returning(table)).row


def _update(db: Database, table: Table, row_id: int, values: dict, label: str) -> dict:
    stmt = update(table).where(table.c.id == row_id).values(**values).returning(table)
    row = db.execute(stmt).row
    if row is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return row


def _delete(db: Database, table: Table, row_id: int) -> dict:
    # Success even when nothing matched
    db.execute(delete(table).where(table.c.id == row_id))
    return DELETED


# -------------------- Gallery --------------------

@router.get("/gallery")
def list_gallery(db: Database = Depends(get_db)):
    return db.query_many(select(gallery).order_by(gallery.c.id))


@router.post("/gallery", status_code=status.HTTP_201_CREATED)
def create_gallery_item(payload: GalleryIn, db: Database = Depends(get_db)):
    return _create(db, gallery, payload.model_dump())


@router.delete("/gallery/{item_id}")
def delete_gallery_item(item_id: int, db: Database = Depends(get_db)):
    return _delete(db, gallery, item_id)


# -------------------- Stories --------------------

@router.get("/stories")
def list_stories(db: Database = Depends(get_db)):
    return db.query_many(select(stories).order_by(stories.c.id))


@router.post("/stories", status_code=status.HTTP_201_CREATED)
def create_story(payload: StoryIn, db: Database = Depends(get_db)):
    return _create(db, stories, payload.model_dump())


@router.put("/stories/{story_id}")
def update_story(story_id: int, payload: StoryIn, db: Database = Depends(get_db)):
    return _update(db, stories, story_id, payload.model_dump(), "Story")


@router.delete("/stories/{story_id}")
def delete_story(story_id: int, db: Database = Depends(get_db)):
    return _delete(db, stories, story_id)


# -------------------- Team --------------------

@router.get("/team")
def list_team(db: Database = Depends(get_db)):
    return db.query_many(select(team).order_by(team.c.id))


@router.post("/team", status_code=status.HTTP_201_CREATED)
def create_team_member(payload: TeamMemberIn, db: Database = Depends(get_db)):
    return _create(db, team, payload.model_dump())


@router.put("/team/{member_id}")
def update_team_member(member_id: int, payload: TeamMemberIn, db: Database = Depends(get_db)):
    return _update(db, team, member_id, payload.model_dump(), "Team member")


@router.delete("/team/{member_id}")
def delete_team_member(member_id: int, db: Database = Depends(get_db)):
    return _delete(db, team, member_id)


# -------------------- Journey --------------------

@router.get("/journey")
def list_journey(db: Database = Depends(get_db)):
    return db.query_many(select(journey).order_by(journey.c.year.asc(), journey.c.id))


@router.post("/journey", status_code=status.HTTP_201_CREATED)
def create_journey_entry(payload: JourneyIn, db: Database = Depends(get_db)):
    return _create(db, journey, payload.model_dump())


@router.put("/journey/{entry_id}")
def update_journey_entry(entry_id: int, payload: JourneyIn, db: Database = Depends(get_db)):
    return _update(db, journey, entry_id, payload.model_dump(), "Journey entry")


@router.delete("/journey/{entry_id}")
def delete_journey_entry(entry_id: int, db: Database = Depends(get_db)):
    return _delete(db, journey, entry_id)


# -------------------- Programs --------------------

@router.get("/programs")
def list_programs(db: Database = Depends(get_db)):
    return db.query_many(select(programs).order_by(programs.c.id))


@router.post("/programs", status_code=status.HTTP_201_CREATED)
def create_program(payload: ProgramIn, db: Database = Depends(get_db)):
    return _create(db, programs, payload.model_dump())


@router.put("/programs/{program_id}")
def update_program(program_id: int, payload: ProgramIn, db: Database = Depends(get_db)):
    return _update(db, programs, program_id, payload.model_dump(), "Program")


@router.delete("/programs/{program_id}")
def delete_program(program_id: int, db: Database = Depends(get_db)):
    return _delete(db, programs, program_id)


# -------------------- Settings --------------------

@router.get("/settings/{key}")
def get_setting(key: str, db: Database = Depends(get_db)):
    """Stored value for `key`, or null when the key was never written."""
    row = db.query_one(select(settings.c.value).where(settings.c.key == key))
    return row["value"] if row else None


@router.post("/settings/{key}")
def put_setting(key: str, payload: SettingIn, db: Database = Depends(get_db)):
    row = db.upsert(settings, {"key": key, "value": payload.value}, conflict=("key",), update=("value",))
    return {"key": row["key"], "value": row["value"]}


# -------------------- Messages --------------------

@router.get("/messages")
def list_messages(db: Database = Depends(get_db)):
    return db.query_many(select(messages).order_by(messages.c.date.desc(), messages.c.id.desc()))


@router.post("/messages", status_code=status.HTTP_201_CREATED)
def create_message(payload: MessageIn, db: Database = Depends(get_db)):
    return _create(db, messages, dict(payload.model_dump(), date=utcnow(), read=False))


@router.put("/messages/{message_id}/read")
def mark_message_read(message_id: int, db: Database = Depends(get_db)):
    return _update(db, messages, message_id, {"read": True}, "Message")


@router.delete("/messages/{message_id}")
def delete_message(message_id: int, db: Database = Depends(get_db)):
    return _delete(db, messages, message_id)
