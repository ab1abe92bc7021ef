"""
Election API Endpoints

職責：
1. 建立選舉
2. 查詢選舉快照
3. 階段轉換（guarded step）
"""
from fastapi import APIRouter, Depends, HTTPException
import logging

from schemas import (
    ElectionCreate,
    ElectionCreatedResponse,
    ElectionResponse,
    NomineeResponse,
    StepRequest,
    StepResponse,
    TallyEntryResponse,
)
from core.election_manager import ElectionManager
from core.exceptions import (
    ElectionNotFound,
    InvalidDirection,
    PhaseConflict,
    RegistryFull,
    UnknownPhase,
)
from core.registry import ElectionRegistry
from api.dependencies import get_registry

router = APIRouter(prefix="/api/elections", tags=["elections"])
logger = logging.getLogger(__name__)


@router.post("", response_model=ElectionCreatedResponse)
async def create_election(data: ElectionCreate, registry: ElectionRegistry = Depends(get_registry)):
    """
    建立新選舉

    流程：
    1. 整理候選人名冊（去空白行、排序、去重、編號）
    2. 產生隨機選舉 ID
    3. 返回 ID，之後所有操作都用這個 ID
    """
    try:
        election_id = ElectionManager.create_election(registry, data.elected_role, data.nominees)
        return ElectionCreatedResponse(election_id=election_id)

    except RegistryFull as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create election: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{election_id}", response_model=ElectionResponse)
async def get_election(election_id: str, registry: ElectionRegistry = Depends(get_registry)):
    """
    取得選舉快照

    返回：
        - phase / title / description: 目前階段與說明
        - nominees: 候選人（依 ID 排序）
        - voters: 目前這一輪已投票的人
        - results: 只有在非投票階段才會公布
    """
    try:
        snapshot = ElectionManager.get_snapshot(registry, election_id)

        return ElectionResponse(
            election_id=snapshot.election_id,
            phase=snapshot.phase,
            title=snapshot.title,
            description=list(snapshot.description),
            elected_role=snapshot.elected_role,
            round_number=snapshot.round_number,
            nominees=[NomineeResponse(id=i, name=name) for i, name in snapshot.nominees],
            voters=snapshot.voters,
            vote_count=snapshot.vote_count,
            results_visible=snapshot.results_visible,
            results=[TallyEntryResponse(**entry) for entry in snapshot.results],
            max_votes=snapshot.max_votes,
            winners=snapshot.winners,
        )

    except ElectionNotFound:
        raise HTTPException(status_code=404, detail="Election not found")
    except Exception as e:
        logger.error(f"Failed to get election: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.post("/{election_id}/step", response_model=StepResponse)
async def step_election(
    election_id: str,
    step: StepRequest,
    registry: ElectionRegistry = Depends(get_registry)
):
    """
    階段轉換（主持人 endpoint）

    客戶端必須送出它畫面上的階段（expected_phase），
    如果別人已經先推進了，會收到 409，請重新取得狀態再決定

    參數：
        expected_phase: 例如 "FirstVote"
        direction: next / prev / reset

    返回：
        - status: "ok"
        - phase: 轉換後的階段
    """
    try:
        phase = ElectionManager.request_transition(
            registry, election_id, step.expected_phase, step.direction
        )
        return StepResponse(status="ok", phase=phase)

    except ElectionNotFound:
        raise HTTPException(status_code=404, detail="Election not found")
    except PhaseConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (UnknownPhase, InvalidDirection) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to step election: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
