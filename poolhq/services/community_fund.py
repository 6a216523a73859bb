"""Reconciliation of Community Fund votes with the local store and the pool."""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from poolhq.core.config import Settings
from poolhq.models import Vote, VoteChoice, VoteType
from poolhq.obs import record_pool_submission, record_votes_persisted, start_span
from poolhq.services.addresses import (
    AddressLookupError,
    AddressResolver,
    DatabaseAddressResolver,
)
from poolhq.services.matching import match_vote
from poolhq.services.pool_client import PoolApiClient, PoolApiError, VoteSubmitter
from poolhq.services.vote_store import VoteStore

LOGGER = logging.getLogger(__name__)

CHOICE_TOKENS: dict[VoteChoice, str] = {
    VoteChoice.YES: "yes",
    VoteChoice.NO: "no",
    VoteChoice.ABSTAIN: "remove",
}

_FETCH_ERROR_MESSAGES: dict[VoteType, str] = {
    VoteType.PROPOSAL: "Unable to retrieve proposal votes",
    VoteType.PAYMENT_REQUEST: "Unable to retrieve payment request votes",
}


class CommunityFundError(RuntimeError):
    """Base class for Community Fund vote errors."""


class VotesFetchError(CommunityFundError):
    """Raised when the stored votes of a user cannot be read."""


class VotePersistenceError(CommunityFundError):
    """Raised when a batch of votes could not be written; nothing was saved."""


@dataclass(slots=True, frozen=True)
class VoteIntent:
    """A choice the user wants recorded for a proposal or payment request."""

    hash: str
    choice: VoteChoice


@dataclass(slots=True, frozen=True)
class PropagationOutcome:
    """Result of submitting one vote for one address."""

    address: str
    vote_hash: str
    vote_type: VoteType
    succeeded: bool
    error: str | None = None


@dataclass(slots=True)
class PropagationReport:
    """Per (address, vote) results of a propagation pass."""

    outcomes: list[PropagationOutcome] = field(default_factory=list)
    error: str | None = None

    @property
    def failures(self) -> list[PropagationOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    @property
    def succeeded(self) -> bool:
        return self.error is None and not self.failures

    @property
    def last_error(self) -> str | None:
        failures = self.failures
        if failures:
            return failures[-1].error
        return self.error

    def for_vote(self, vote_hash: str, vote_type: VoteType) -> list[PropagationOutcome]:
        return [
            outcome
            for outcome in self.outcomes
            if outcome.vote_hash == vote_hash and outcome.vote_type == vote_type
        ]


@dataclass(slots=True, frozen=True)
class VoteUpdateResult:
    """Votes saved by a batch together with the report of their propagation."""

    votes: list[Vote]
    propagation: PropagationReport


class CommunityFundService:
    """Persists a user's vote intents and forwards them to the pool."""

    def __init__(
        self,
        session: Session,
        *,
        settings: Settings,
        address_resolver: AddressResolver | None = None,
        pool_client: VoteSubmitter | None = None,
    ) -> None:
        self._settings = settings
        self._store = VoteStore(session)
        self._address_resolver = address_resolver or DatabaseAddressResolver(session)
        self._pool_client = pool_client

    def get_votes(self, user_id: str, vote_type: VoteType) -> list[Vote]:
        try:
            return self._store.list_votes(user_id, vote_type)
        except SQLAlchemyError as exc:
            raise VotesFetchError(_FETCH_ERROR_MESSAGES[vote_type]) from exc

    def get_proposal_votes(self, user_id: str) -> list[Vote]:
        return self.get_votes(user_id, VoteType.PROPOSAL)

    def get_payment_request_votes(self, user_id: str) -> list[Vote]:
        return self.get_votes(user_id, VoteType.PAYMENT_REQUEST)

    def update_proposal_votes(self, intents: Iterable[VoteIntent], user_id: str) -> VoteUpdateResult:
        return self.update_votes(intents, user_id, VoteType.PROPOSAL)

    def update_payment_request_votes(
        self, intents: Iterable[VoteIntent], user_id: str
    ) -> VoteUpdateResult:
        return self.update_votes(intents, user_id, VoteType.PAYMENT_REQUEST)

    def update_votes(
        self, intents: Iterable[VoteIntent], user_id: str, vote_type: VoteType
    ) -> VoteUpdateResult:
        """Save ``intents`` as one batch, then propagate the saved votes.

        The batch is all-or-nothing. Propagation runs only after the batch is
        committed and its failures are reported, never rolled back.
        """

        modified: list[Vote] = []
        seen: set[int] = set()
        try:
            with self._store.transaction():
                baseline = self.get_votes(user_id, vote_type)
                for intent in intents:
                    vote = self._apply_intent(intent, user_id, vote_type, baseline)
                    if id(vote) not in seen:
                        seen.add(id(vote))
                        modified.append(vote)
        except SQLAlchemyError as exc:
            label = vote_type.value.lower().replace("_", " ")
            raise VotePersistenceError(f"Unable to save {label} votes") from exc

        record_votes_persisted(vote_type.value, len(modified))
        LOGGER.info(
            "%d votes have been updated",
            len(modified),
            extra={"user_id": user_id, "vote_type": vote_type.value},
        )

        report = self.propagate(modified, user_id)
        return VoteUpdateResult(votes=modified, propagation=report)

    def _apply_intent(
        self, intent: VoteIntent, user_id: str, vote_type: VoteType, baseline: list[Vote]
    ) -> Vote:
        vote = match_vote(intent.hash, vote_type, baseline)
        try:
            if vote is None:
                vote = self._store.create(
                    user_id=user_id, vote_type=vote_type, hash=intent.hash, choice=intent.choice
                )
                baseline.append(vote)
            else:
                self._store.update_choice(vote, intent.choice)
        except SQLAlchemyError as exc:
            raise VotePersistenceError(f"Unable to save vote for {intent.hash}") from exc
        return vote

    def propagate(self, votes: Sequence[Vote], user_id: str) -> PropagationReport:
        """Submit every vote for every address of the user.

        A vote is marked committed only when the pool accepted it for all
        addresses attempted in this pass.
        """

        report = PropagationReport()
        if not votes:
            return report

        with start_span("community_fund.propagate", user_id=user_id, votes=len(votes)) as span:
            try:
                addresses = self._address_resolver.get_addresses(user_id)
            except AddressLookupError as exc:
                LOGGER.warning("address lookup failed", extra={"user_id": user_id, "error": str(exc)})
                span.record_exception(exc)
                report.error = str(exc)
                return report

            client = self._pool_client
            owned_client: PoolApiClient | None = None
            if client is None:
                owned_client = PoolApiClient.from_settings(self._settings)
                client = owned_client

            try:
                for address in addresses:
                    for vote in votes:
                        report.outcomes.append(
                            self._submit(client, address.spending_address, vote)
                        )
            finally:
                if owned_client is not None:
                    owned_client.close()

            span.set_attribute("failures", len(report.failures))

        self._mark_committed(votes, report)
        return report

    def _submit(self, client: VoteSubmitter, address: str, vote: Vote) -> PropagationOutcome:
        submitters: dict[VoteType, Callable[[str, str, str], None]] = {
            VoteType.PROPOSAL: client.submit_proposal_vote,
            VoteType.PAYMENT_REQUEST: client.submit_payment_request_vote,
        }
        try:
            submitters[vote.type](address, vote.hash, CHOICE_TOKENS[vote.choice])
        except PoolApiError as exc:
            LOGGER.warning(
                "pool vote submission failed",
                extra={"address": address, "hash": vote.hash, "error": str(exc)},
            )
            return self._failed(address, vote, str(exc))
        except Exception as exc:
            LOGGER.warning(
                "unexpected error submitting vote to the pool",
                exc_info=True,
                extra={"address": address, "hash": vote.hash},
            )
            return self._failed(address, vote, f"Unexpected error submitting {vote.hash}: {exc}")
        record_pool_submission(vote.type.value, succeeded=True)
        return PropagationOutcome(
            address=address, vote_hash=vote.hash, vote_type=vote.type, succeeded=True
        )

    @staticmethod
    def _failed(address: str, vote: Vote, error: str) -> PropagationOutcome:
        record_pool_submission(vote.type.value, succeeded=False)
        return PropagationOutcome(
            address=address, vote_hash=vote.hash, vote_type=vote.type, succeeded=False, error=error
        )

    def _mark_committed(self, votes: Sequence[Vote], report: PropagationReport) -> None:
        for vote in votes:
            outcomes = report.for_vote(vote.hash, vote.type)
            if not outcomes or not all(outcome.succeeded for outcome in outcomes):
                continue
            vote.committed = True
            try:
                self._store.save(vote)
            except SQLAlchemyError:
                LOGGER.warning(
                    "unable to mark vote as committed",
                    exc_info=True,
                    extra={"hash": vote.hash, "vote_type": vote.type.value},
                )


__all__ = [
    "CHOICE_TOKENS",
    "CommunityFundError",
    "CommunityFundService",
    "PropagationOutcome",
    "PropagationReport",
    "VoteIntent",
    "VotePersistenceError",
    "VoteUpdateResult",
    "VotesFetchError",
]
