"""
ChowPilot Checklist Builder

Builds the four-stage checklist:

    Stage 1: Pre-Outreach   - facts already answered by the form (completed)
    Stage 2: Outreach       - contact responsible parties, contract status
    Stage 3: Post-Outreach  - account moves, rate changes, escalations
    Stage 4: Continuous     - ongoing collection of pre-CHOW invoices

Stages 2-4 are independent conditional appends. When there is no exposure
at all the plan collapses to a short onboarding/archive checklist.
"""
from __future__ import annotations

from ..models import Checklist, ChecklistTask, RiskLevel, TaskLabel
from .normalizer import Facts


BILLING = TaskLabel.BILLING
SALES = TaskLabel.SALES
ESCALATE = TaskLabel.ESCALATE


def _pre_outreach(f: Facts) -> list[ChecklistTask]:
    return [
        ChecklistTask(
            "Confirm outstanding AR status",
            completed=True,
            note="Yes - has outstanding AR" if f.has_ar else "No outstanding AR",
        ),
        ChecklistTask(
            "Confirm future booked shifts (FBS)",
            completed=True,
            note="Yes - has FBS" if f.has_fbs else "No FBS",
        ),
        ChecklistTask(
            "Confirm acquisition date and timing",
            completed=True,
            note=f.timing.value.upper(),
        ),
        ChecklistTask(
            "Determine sale type",
            completed=True,
            note=f.case.sale_type.value.upper(),
        ),
        ChecklistTask(
            "Check if account is in bad debt collections",
            completed=True,
            note="YES - in bad debt" if f.in_bad_debt else None,
        ),
    ]


def _outreach(f: Facts) -> list[ChecklistTask]:
    tasks = []

    if f.is_asset_sale or f.is_unknown_sale:
        tasks.append(ChecklistTask(
            "Confirm financial responsibility with old owner for pre-sale invoices", label=BILLING,
        ))
    if f.is_stock_sale:
        tasks.append(ChecklistTask(
            "Confirm new owner understands they assume all outstanding debt", label=BILLING,
        ))

    tasks.append(ChecklistTask("Confirm all payers know when we expect next payment", label=BILLING))

    if f.has_distress or f.unknown_distress:
        tasks.append(ChecklistTask(
            "Investigate signs of financial distress from responsible owner",
            completed=f.has_distress,
            note="Already indicated: YES" if f.has_distress else None,
            label=BILLING,
        ))

    if f.contract_missing:
        tasks.append(ChecklistTask("Sales: Get new contract signed with new ownership", label=SALES))
    else:
        tasks.append(ChecklistTask(
            "Confirm contract is in place with Sales", completed=f.contract_signed, label=SALES,
        ))

    tasks.append(ChecklistTask("Request proof of ownership change documentation", label=BILLING))
    return tasks


def _post_outreach(f: Facts) -> list[ChecklistTask]:
    tasks = [ChecklistTask(
        "Once financial responsibility confirmed, tag leadership for re-enrollment decision",
        label=ESCALATE,
    )]

    if f.is_asset_sale:
        tasks.append(ChecklistTask(
            "Sales: Create new parent account for acquiring entity across all platforms", label=SALES,
        ))
        tasks.append(ChecklistTask(
            "Sales: Mark old parent account as inactive (unless other active facilities remain)",
            label=SALES,
        ))
        if f.has_exposure:
            tasks.append(ChecklistTask("Transfer pre-sale invoices/shifts to old entity account", label=BILLING))

    if f.is_stock_sale:
        tasks.append(ChecklistTask("Sales: Update existing parent account info across all platforms", label=SALES))
        tasks.append(ChecklistTask("Sales: Verify and update all child facility links", label=SALES))

    tasks.append(ChecklistTask("Sales: Adjust charge rates as necessary", label=SALES))

    if f.has_ar and f.is_asset_sale:
        tasks.append(ChecklistTask(
            "Notify @cash-ops-team of transferred invoices (include list, partial payments, credit notes)",
            label=BILLING,
        ))

    if f.in_bad_debt and f.is_stock_sale:
        tasks.append(ChecklistTask(
            "Tag bad debt team in #collections-team about acquisition (stock sale = new owner takes debt)",
            label=ESCALATE,
        ))
        tasks.append(ChecklistTask("Wait for Kelly approval before re-enrolling", label=ESCALATE))

    return tasks


def _continuous(f: Facts) -> list[ChecklistTask]:
    if not f.has_ar:
        return []
    tasks = [
        ChecklistTask("Continue chasing responsible party for pre-CHOW invoices", label=BILLING),
        ChecklistTask("Monitor for payment commitments and follow up", label=BILLING),
    ]
    if f.is_asset_sale:
        tasks.append(ChecklistTask("Archive old account once all invoices paid", label=BILLING))
    return tasks


def build_checklist(facts: Facts, level: RiskLevel) -> Checklist:
    """
    Build the staged checklist.

    The risk level is accepted for symmetry with the narrative generators;
    no task currently depends on it.
    """
    checklist = Checklist(
        pre_outreach=tuple(_pre_outreach(facts)),
        outreach=tuple(_outreach(facts)),
        post_outreach=tuple(_post_outreach(facts)),
        continuous=tuple(_continuous(facts)),
    )

    # No AR and no FBS: replace stages 2-4 wholesale
    if not facts.has_exposure:
        checklist = Checklist(
            pre_outreach=checklist.pre_outreach,
            outreach=(ChecklistTask(
                "Coordinate with Sales on new customer onboarding (if applicable)", label=SALES,
            ),),
            post_outreach=(ChecklistTask("Archive old account", label=BILLING),),
            continuous=(ChecklistTask("No ongoing collection needed - $0 AR", completed=True),),
        )

    return checklist
