"""
Vote API Endpoints

職責：
1. 投票（同一人重投會覆蓋）
2. 查詢已投票名單
"""
from fastapi import APIRouter, Depends, HTTPException
import logging

from schemas import VoteSubmit, VoteResponse, VotersResponse
from core.election_manager import ElectionManager
from core.exceptions import ElectionNotFound, UnknownNominee
from core.registry import ElectionRegistry
from api.dependencies import get_registry

router = APIRouter(prefix="/api/elections", tags=["votes"])
logger = logging.getLogger(__name__)


@router.post("/{election_id}/votes", response_model=VoteResponse)
async def cast_vote(
    election_id: str,
    vote: VoteSubmit,
    registry: ElectionRegistry = Depends(get_registry)
):
    """
    投票（玩家 endpoint）

    注意：
    - 不檢查客戶端以為的階段
    - 非投票階段送來的票會被忽略，仍然回 200（stored=false）
    """
    try:
        stored = ElectionManager.cast_vote(
            registry, election_id, vote.voter_name, vote.nominee_id
        )
        return VoteResponse(status="ok", stored=stored)

    except ElectionNotFound:
        raise HTTPException(status_code=404, detail="Election not found")
    except UnknownNominee as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to cast vote: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{election_id}/voters", response_model=VotersResponse)
async def get_voters(election_id: str, registry: ElectionRegistry = Depends(get_registry)):
    """目前這一輪已投票的人（字典序）"""
    try:
        voters = ElectionManager.get_voters(registry, election_id)
        return VotersResponse(voters=voters, vote_count=len(voters))

    except ElectionNotFound:
        raise HTTPException(status_code=404, detail="Election not found")
    except Exception as e:
        logger.error(f"Failed to get voters: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
