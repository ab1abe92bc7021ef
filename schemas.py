"""
API 請求 / 回應格式（Pydantic models）
"""
from typing import List, Union

from pydantic import BaseModel, Field, field_validator

from models import ElectionPhase
from services.naming_service import split_nominee_text


# ============ Election ============

class ElectionCreate(BaseModel):
    elected_role: str = Field(..., min_length=1, examples=["Facilitator"])
    # 可以是字串列表，也可以是表單的多行文字（一行一個候選人）
    nominees: Union[List[str], str] = Field(..., examples=[["Alice", "Bob"]])

    @field_validator("nominees")
    @classmethod
    def split_text(cls, value):
        if isinstance(value, str):
            return split_nominee_text(value)
        return value


class ElectionCreatedResponse(BaseModel):
    election_id: str


class NomineeResponse(BaseModel):
    id: int
    name: str


class TallyEntryResponse(BaseModel):
    name: str
    count: int
    share: int


class ElectionResponse(BaseModel):
    election_id: str
    phase: ElectionPhase
    title: str
    description: List[str]
    elected_role: str
    round_number: int
    nominees: List[NomineeResponse]
    voters: List[str]
    vote_count: int
    results_visible: bool
    results: List[TallyEntryResponse]
    max_votes: int
    winners: List[str]


# ============ Step ============

class StepRequest(BaseModel):
    expected_phase: str = Field(..., examples=["FirstVote"])
    direction: str = Field(..., examples=["next"])


class StepResponse(BaseModel):
    status: str
    phase: ElectionPhase


# ============ Vote ============

class VoteSubmit(BaseModel):
    voter_name: str = Field(..., min_length=1, examples=["Alice"])
    nominee_id: int = Field(..., ge=0, examples=[0])


class VoteResponse(BaseModel):
    status: str
    stored: bool


class VotersResponse(BaseModel):
    voters: List[str]
    vote_count: int
