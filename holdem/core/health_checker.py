"""
Hand state health checker.

Validates a hand session snapshot against the chip, turn and board
invariants of the betting engine. Used by the tests after every action and
available to callers that want to audit a hand.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from .enums import RoundState
from .session import HandSnapshot


class HealthIssueType(Enum):
    """Types of health issues that can be detected."""
    CHIP_CONSERVATION_VIOLATION = "chip_conservation_violation"
    INVALID_POT_AMOUNT = "invalid_pot_amount"
    INVALID_CURRENT_SEAT = "invalid_current_seat"
    INVALID_COMMITMENTS = "invalid_commitments"
    INVALID_BOARD = "invalid_board"
    DUPLICATE_CARDS = "duplicate_cards"


class HealthIssueSeverity(Enum):
    """Severity levels for health issues."""
    CRITICAL = "critical"
    WARNING = "warning"


@dataclass
class HealthIssue:
    """Represents a health issue found during validation.

    Attributes:
        issue_type: The type of issue detected.
        severity: The severity level of the issue.
        message: Human-readable description of the issue.
        details: Additional details about the issue.
    """
    issue_type: HealthIssueType
    severity: HealthIssueSeverity
    message: str
    details: Dict[str, Any]


@dataclass
class HealthCheckResult:
    """Result of a health check operation."""
    is_healthy: bool
    issues: List[HealthIssue]
    summary: Dict[str, Any]


class HandHealthChecker:
    """Health checker for hand session snapshots."""

    def check_health(self, snapshot: HandSnapshot) -> HealthCheckResult:
        """Perform every check on a snapshot.

        Args:
            snapshot: The hand snapshot to check.

        Returns:
            Health check result with any issues found.
        """
        issues = []
        issues.extend(self._check_chip_conservation(snapshot))
        issues.extend(self._check_pot_amount(snapshot))
        issues.extend(self._check_current_seat(snapshot))
        issues.extend(self._check_commitments(snapshot))
        issues.extend(self._check_board(snapshot))
        issues.extend(self._check_duplicate_cards(snapshot))

        critical_issues = [i for i in issues if i.severity == HealthIssueSeverity.CRITICAL]

        summary = {
            "total_issues": len(issues),
            "critical_issues": len(critical_issues),
            "checked_at_round": snapshot.round_state.label,
            "total_participants": len(snapshot.participants),
        }

        return HealthCheckResult(
            is_healthy=len(critical_issues) == 0,
            issues=issues,
            summary=summary
        )

    def _check_chip_conservation(self, snapshot: HandSnapshot) -> List[HealthIssue]:
        """Every seat's stack plus its hand commitment equals its starting stack,
        and the table total is conserved up to the unallocated remainder."""
        issues = []

        payouts = snapshot.result.payouts if snapshot.resolved and snapshot.result is not None else {}
        for p in snapshot.participants:
            won = payouts.get(p.seat_id, 0)
            if p.stack - won + p.committed_this_hand != p.starting_stack:
                issues.append(HealthIssue(
                    issue_type=HealthIssueType.CHIP_CONSERVATION_VIOLATION,
                    severity=HealthIssueSeverity.CRITICAL,
                    message=f"Seat {p.seat_id} stack {p.stack} - won {won} + committed {p.committed_this_hand} "
                            f"!= starting stack {p.starting_stack}",
                    details={"seat_id": p.seat_id, "stack": p.stack, "won": won,
                             "committed_this_hand": p.committed_this_hand,
                             "starting_stack": p.starting_stack}
                ))

        expected_total = sum(p.starting_stack for p in snapshot.participants)
        stacks = sum(p.stack for p in snapshot.participants)
        if snapshot.resolved and snapshot.result is not None:
            actual_total = stacks + snapshot.result.unallocated
        else:
            actual_total = stacks + snapshot.pot

        if actual_total != expected_total:
            issues.append(HealthIssue(
                issue_type=HealthIssueType.CHIP_CONSERVATION_VIOLATION,
                severity=HealthIssueSeverity.CRITICAL,
                message=f"Chip conservation violated: expected {expected_total}, got {actual_total}",
                details={"expected_total": expected_total, "actual_total": actual_total,
                         "stacks": stacks, "pot": snapshot.pot}
            ))

        return issues

    def _check_pot_amount(self, snapshot: HandSnapshot) -> List[HealthIssue]:
        committed = sum(p.committed_this_hand for p in snapshot.participants)
        if snapshot.pot == committed:
            return []
        return [HealthIssue(
            issue_type=HealthIssueType.INVALID_POT_AMOUNT,
            severity=HealthIssueSeverity.CRITICAL,
            message=f"Pot {snapshot.pot} does not match total commitments {committed}",
            details={"pot": snapshot.pot, "committed": committed}
        )]

    def _check_current_seat(self, snapshot: HandSnapshot) -> List[HealthIssue]:
        """The seat on action must exist and be able to act; nobody is on
        action once the hand is over."""
        seat = snapshot.current_seat
        if seat is None:
            if snapshot.started and snapshot.round_state != RoundState.SHOWDOWN:
                return [HealthIssue(
                    issue_type=HealthIssueType.INVALID_CURRENT_SEAT,
                    severity=HealthIssueSeverity.CRITICAL,
                    message=f"No seat on action during {snapshot.round_state.label}",
                    details={"round": snapshot.round_state.label}
                )]
            return []

        if snapshot.round_state == RoundState.SHOWDOWN:
            return [HealthIssue(
                issue_type=HealthIssueType.INVALID_CURRENT_SEAT,
                severity=HealthIssueSeverity.CRITICAL,
                message=f"Seat {seat} on action after showdown",
                details={"current_seat": seat}
            )]

        participant = snapshot.get_participant(seat)
        if participant is None or not participant.can_act:
            return [HealthIssue(
                issue_type=HealthIssueType.INVALID_CURRENT_SEAT,
                severity=HealthIssueSeverity.CRITICAL,
                message=f"Seat {seat} on action cannot act",
                details={"current_seat": seat}
            )]
        return []

    def _check_commitments(self, snapshot: HandSnapshot) -> List[HealthIssue]:
        issues = []
        for p in snapshot.participants:
            if p.stack < 0 or p.committed_this_round < 0:
                issues.append(HealthIssue(
                    issue_type=HealthIssueType.INVALID_COMMITMENTS,
                    severity=HealthIssueSeverity.CRITICAL,
                    message=f"Seat {p.seat_id} has negative chips",
                    details={"seat_id": p.seat_id, "stack": p.stack,
                             "committed_this_round": p.committed_this_round}
                ))
            if p.committed_this_round > snapshot.highest_commitment:
                issues.append(HealthIssue(
                    issue_type=HealthIssueType.INVALID_COMMITMENTS,
                    severity=HealthIssueSeverity.CRITICAL,
                    message=f"Seat {p.seat_id} committed {p.committed_this_round} "
                            f"above highest commitment {snapshot.highest_commitment}",
                    details={"seat_id": p.seat_id,
                             "committed_this_round": p.committed_this_round,
                             "highest_commitment": snapshot.highest_commitment}
                ))
            if p.all_in and p.stack != 0:
                issues.append(HealthIssue(
                    issue_type=HealthIssueType.INVALID_COMMITMENTS,
                    severity=HealthIssueSeverity.WARNING,
                    message=f"Seat {p.seat_id} is all-in with {p.stack} chips behind",
                    details={"seat_id": p.seat_id, "stack": p.stack}
                ))
        return issues

    def _check_board(self, snapshot: HandSnapshot) -> List[HealthIssue]:
        size = len(snapshot.board)
        expected = snapshot.round_state.expected_board_size
        # 提前结束的摊牌可能少于5张公共牌
        if snapshot.round_state == RoundState.SHOWDOWN:
            valid = size in (0, 3, 4, 5)
        else:
            valid = size == expected
        if valid:
            return []
        return [HealthIssue(
            issue_type=HealthIssueType.INVALID_BOARD,
            severity=HealthIssueSeverity.CRITICAL,
            message=f"Board has {size} cards during {snapshot.round_state.label}",
            details={"board_size": size, "expected": expected}
        )]

    def _check_duplicate_cards(self, snapshot: HandSnapshot) -> List[HealthIssue]:
        cards = list(snapshot.board)
        for p in snapshot.participants:
            cards.extend(p.hole_cards)
        duplicates = [str(card) for card, count in Counter(cards).items() if count > 1]
        if not duplicates:
            return []
        return [HealthIssue(
            issue_type=HealthIssueType.DUPLICATE_CARDS,
            severity=HealthIssueSeverity.CRITICAL,
            message=f"Duplicate cards dealt: {', '.join(duplicates)}",
            details={"duplicates": duplicates}
        )]
