"""Community Fund voting endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from poolhq.api.deps import get_community_fund_service
from poolhq.api.routes.auth import AuthenticatedUser, get_current_user
from poolhq.models import VoteType
from poolhq.schemas.vote import (
    PropagationOutcomeRead,
    PropagationRead,
    VoteIntentPayload,
    VoteRead,
    VoteUpdateResponse,
)
from poolhq.services.community_fund import (
    CommunityFundService,
    VoteIntent,
    VotePersistenceError,
    VotesFetchError,
    VoteUpdateResult,
)

router = APIRouter(prefix="/community-fund")


def _list_votes(service: CommunityFundService, user: AuthenticatedUser, vote_type: VoteType) -> list[VoteRead]:
    try:
        votes = service.get_votes(user.id, vote_type)
    except VotesFetchError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return [VoteRead.model_validate(vote) for vote in votes]


def _update_votes(
    service: CommunityFundService,
    user: AuthenticatedUser,
    vote_type: VoteType,
    payload: list[VoteIntentPayload],
) -> VoteUpdateResponse:
    intents = [VoteIntent(hash=item.hash, choice=item.choice) for item in payload]
    try:
        result = service.update_votes(intents, user.id, vote_type)
    except (VotesFetchError, VotePersistenceError) as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return _to_response(result)


def _to_response(result: VoteUpdateResult) -> VoteUpdateResponse:
    report = result.propagation
    return VoteUpdateResponse(
        votes=[VoteRead.model_validate(vote) for vote in result.votes],
        propagation=PropagationRead(
            succeeded=report.succeeded,
            error=report.last_error,
            outcomes=[PropagationOutcomeRead.model_validate(outcome) for outcome in report.outcomes],
        ),
    )


@router.get("/proposal/votes", response_model=list[VoteRead])
def get_proposal_votes(
    service: CommunityFundService = Depends(get_community_fund_service),
    user: AuthenticatedUser = Depends(get_current_user),
) -> list[VoteRead]:
    return _list_votes(service, user, VoteType.PROPOSAL)


@router.put("/proposal/votes", response_model=VoteUpdateResponse)
def update_proposal_votes(
    payload: list[VoteIntentPayload],
    service: CommunityFundService = Depends(get_community_fund_service),
    user: AuthenticatedUser = Depends(get_current_user),
) -> VoteUpdateResponse:
    return _update_votes(service, user, VoteType.PROPOSAL, payload)


@router.get("/payment-request/votes", response_model=list[VoteRead])
def get_payment_request_votes(
    service: CommunityFundService = Depends(get_community_fund_service),
    user: AuthenticatedUser = Depends(get_current_user),
) -> list[VoteRead]:
    return _list_votes(service, user, VoteType.PAYMENT_REQUEST)


@router.put("/payment-request/votes", response_model=VoteUpdateResponse)
def update_payment_request_votes(
    payload: list[VoteIntentPayload],
    service: CommunityFundService = Depends(get_community_fund_service),
    user: AuthenticatedUser = Depends(get_current_user),
) -> VoteUpdateResponse:
    return _update_votes(service, user, VoteType.PAYMENT_REQUEST, payload)


__all__ = [
    "get_payment_request_votes",
    "get_proposal_votes",
    "router",
    "update_payment_request_votes",
    "update_proposal_votes",
]
