"""Implementation Guides — Step-by-step instructions for adopting a standard.

Every catalog entry gets a guide assembled from a template:

    Interface:    analyse → study interface → map structures → call → commit → test
    Transaction:  analyse → explore → gap analysis → configure → train → pilot
    Pattern:      entry-specific guide when one exists (pricing, authorization,
                  number ranges, batch input), otherwise the generic template

Each guide carries prerequisites, ordered steps, testing and rollback notes.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from corelens.catalog.entries import CatalogEntry, EntryKind
from corelens.catalog.standards import (
    AUTHORIZATION_OBJECT,
    BATCH_INPUT,
    NUMBER_RANGE,
    PRICING_PROCEDURE,
)


@dataclass(frozen=True)
class ImplementationStep:
    number: int
    title: str
    description: str
    transaction_code: Optional[str] = None
    notes: tuple[str, ...] = ()
    estimated_time: Optional[str] = None


@dataclass(frozen=True)
class ImplementationGuide:
    entry_id: str
    entry_name: str
    overview: str
    prerequisites: tuple[str, ...]
    steps: tuple[ImplementationStep, ...]
    testing: tuple[str, ...]
    rollback: tuple[str, ...]
    best_practices: tuple[str, ...] = ()
    common_pitfalls: tuple[str, ...] = ()
    resources: tuple[str, ...] = field(default_factory=tuple)


def _steps(*specs) -> tuple[ImplementationStep, ...]:
    """Number (title, description, tcode, notes, time) tuples in order."""
    return tuple(
        ImplementationStep(
            number=i,
            title=title,
            description=description,
            transaction_code=tcode,
            notes=tuple(notes),
            estimated_time=time,
        )
        for i, (title, description, tcode, notes, time) in enumerate(specs, 1)
    )


# ---------------------------------------------------------------------------
# Kind templates
# ---------------------------------------------------------------------------

def _interface_guide(entry: CatalogEntry) -> ImplementationGuide:
    return ImplementationGuide(
        entry_id=entry.id,
        entry_name=entry.name,
        overview=(
            f"Replace the custom code with the standard interface {entry.name}. "
            f"{entry.description}."
        ),
        prerequisites=(
            "Development access to the system",
            "Authorization to call BAPIs",
            "Understanding of BAPI return message handling",
            "Test system for validation",
        ),
        steps=_steps(
            ("Analyze Current Custom Code",
             "Document inputs, data transformations, error handling and tables accessed.",
             None, ["List all database tables accessed"], "2-4 hours"),
            ("Study Interface Documentation",
             f"Review the parameters and behaviour of {entry.name}.",
             "BAPI", ["Check mandatory fields", "Review table parameters"], "1-2 hours"),
            ("Map Data Structures",
             "Map the custom data onto the interface structures.",
             "SE11", ["Handle data type conversions carefully"], "2-3 hours"),
            ("Implement Interface Call",
             f"Replace the custom logic with a call to {entry.name} and check the RETURN table.",
             None, ["Handle all message types (E, A, X, W, I, S)"], "3-4 hours"),
            ("Implement Commit Logic",
             "Call BAPI_TRANSACTION_COMMIT on success and BAPI_TRANSACTION_ROLLBACK on error.",
             None, ["Use WAIT = 'X' for synchronous commit"], "1 hour"),
            ("Unit Testing",
             "Compare results with the old custom code for valid, invalid and boundary data.",
             None, [], "4-6 hours"),
        ),
        testing=(
            "Test in development with sample data",
            "Verify all business rules are preserved",
            "Parallel run with the custom code where possible",
        ),
        rollback=(
            "Keep the custom code available but inactive",
            "Test the rollback procedure in development",
        ),
        best_practices=(
            "Always commit after a successful BAPI call",
            "Check the return table for all message types",
        ),
        common_pitfalls=(
            "Forgetting to commit after the call",
            "Ignoring warning messages",
        ),
        resources=(entry.doc_url or "SAP Help Portal", "Transaction BAPI - BAPI Explorer"),
    )


def _transaction_guide(entry: CatalogEntry) -> ImplementationGuide:
    return ImplementationGuide(
        entry_id=entry.id,
        entry_name=entry.name,
        overview=(
            f"Retire the custom program in favour of standard transaction "
            f"{entry.name} ({entry.description})."
        ),
        prerequisites=(
            "Functional knowledge of the business process",
            "Authorization to execute the transaction",
            "Access to customizing if configuration is needed",
        ),
        steps=_steps(
            ("Analyze Custom Program",
             "List the features, validations and workflows the custom program provides.",
             None, [], "2-4 hours"),
            ("Explore Standard Transaction",
             f"Walk through {entry.name} with sample data.",
             entry.name, ["Try all menu options"], "2-3 hours"),
            ("Gap Analysis",
             "List features that the standard lacks and decide on workarounds.",
             None, ["Consider user exits only for business-critical gaps"], "3-4 hours"),
            ("Configure Transaction",
             "Set default values, field properties and variants.",
             "SHD0", [], "2-4 hours"),
            ("User Training",
             "Train users and collect feedback.",
             None, [], "4-8 hours"),
            ("Pilot Testing",
             "Roll out to representative users and monitor usage.",
             None, [], "1-2 weeks"),
        ),
        testing=(
            "Test all business scenarios",
            "Test with different user roles",
            "User acceptance testing",
        ),
        rollback=(
            "Keep the custom program available during the pilot",
            "Document the rollback procedure",
        ),
        best_practices=("Use the standard transaction as-is when possible",),
        common_pitfalls=("Trying to replicate the custom program exactly",),
        resources=(entry.doc_url or "SAP Help Portal",),
    )


def _generic_guide(entry: CatalogEntry) -> ImplementationGuide:
    return ImplementationGuide(
        entry_id=entry.id,
        entry_name=entry.name,
        overview=f"Implementation guide for {entry.name}. {entry.description}.",
        prerequisites=(
            "Understanding of business requirements",
            "Development/configuration authorization",
            "Test environment",
        ),
        steps=_steps(
            ("Analyze Current Solution", "Document the existing custom solution.", None, [], "2-4 hours"),
            ("Study Standard Functionality", f"Review {entry.name} capabilities.", None, [], "2-4 hours"),
            ("Gap Analysis", "Identify differences and workarounds.", None, [], "2-3 hours"),
            ("Implementation", "Implement the standard solution.", None, [], "4-8 hours"),
            ("Testing", "Validate the implementation.", None, [], "4-6 hours"),
            ("Go-Live", "Deploy to production.", None, [], "2-4 hours"),
        ),
        testing=("Functional testing", "Integration testing", "User acceptance testing"),
        rollback=("Keep the custom solution available", "Test the rollback procedure"),
        resources=(entry.doc_url or "SAP Help Portal",),
    )


# ---------------------------------------------------------------------------
# Entry-specific pattern guides
# ---------------------------------------------------------------------------

def _pricing_guide(entry: CatalogEntry) -> ImplementationGuide:
    return ImplementationGuide(
        entry_id=entry.id,
        entry_name=entry.name,
        overview="Replace custom pricing calculations with condition-technique pricing.",
        prerequisites=(
            "SD configuration knowledge",
            "Understanding of the condition technique",
            "Access to pricing customizing",
        ),
        steps=_steps(
            ("Analyze Custom Pricing Logic",
             "List all pricing elements and their calculation sequence.",
             None, ["Note special cases"], "4-6 hours"),
            ("Define Condition Types",
             "Create condition types for prices, discounts and surcharges.",
             "V/06", ["Set up access sequences"], "4-8 hours"),
            ("Create Pricing Procedure",
             "Define the step sequence, subtotals, requirements and formulas.",
             "V/08", [], "4-8 hours"),
            ("Maintain Condition Records",
             "Create condition records with validity dates and scales.",
             "VK11", [], "2-4 hours"),
            ("Assign to Sales Area",
             "Link the procedure to sales area and customer/document pricing procedures.",
             "OVKK", [], "1-2 hours"),
            ("Test Pricing",
             "Create test orders and compare every pricing element with the custom logic.",
             "VA01", [], "4-8 hours"),
        ),
        testing=(
            "Compare prices for a representative order sample",
            "Verify rounding and currency handling",
        ),
        rollback=(
            "Keep the old pricing procedure assignment documented",
            "Revert the sales area assignment if results diverge",
        ),
        best_practices=("Prefer condition records over hard-coded values",),
        common_pitfalls=("Missing access sequences for new condition types",),
        resources=(entry.doc_url or "SAP Help Portal",),
    )


def _authorization_guide(entry: CatalogEntry) -> ImplementationGuide:
    return ImplementationGuide(
        entry_id=entry.id,
        entry_name=entry.name,
        overview="Replace custom permission tables and checks with authorization objects.",
        prerequisites=("Security administration access", "Role design documentation"),
        steps=_steps(
            ("Inventory Custom Checks",
             "List every custom permission check and the fields it guards.",
             None, [], "2-4 hours"),
            ("Define Authorization Object",
             "Create or reuse an authorization object with the needed fields.",
             "SU21", [], "2-3 hours"),
            ("Replace Checks with AUTHORITY-CHECK",
             "Call AUTHORITY-CHECK OBJECT in place of the custom lookup and evaluate SY-SUBRC.",
             None, [], "2-4 hours"),
            ("Maintain Roles",
             "Add the object to the relevant roles.",
             "PFCG", [], "2-4 hours"),
            ("Trace and Verify",
             "Run an authorization trace for each user group.",
             "STAUTHTRACE", [], "2-3 hours"),
        ),
        testing=("Test allowed and denied access for every role",),
        rollback=("Keep the custom permission table read-only until sign-off",),
        resources=(entry.doc_url or "SAP Help Portal",),
    )


def _number_range_guide(entry: CatalogEntry) -> ImplementationGuide:
    return ImplementationGuide(
        entry_id=entry.id,
        entry_name=entry.name,
        overview="Replace custom counters with a number range object.",
        prerequisites=("Customizing access", "Knowledge of current number usage"),
        steps=_steps(
            ("Analyze Custom Numbering",
             "Document the current counter table, intervals and buffering needs.",
             None, [], "1-2 hours"),
            ("Create Number Range Object",
             "Define the object and its intervals.",
             "SNRO", ["Decide on buffering"], "1-2 hours"),
            ("Call NUMBER_GET_NEXT",
             "Replace the custom counter logic with NUMBER_GET_NEXT.",
             None, [], "2-3 hours"),
            ("Migrate Current Counter",
             "Set the interval status to the last number issued by the custom logic.",
             "SNUM", [], "1 hour"),
        ),
        testing=("Verify gap-free numbering under parallel load",),
        rollback=("Keep the custom counter table until numbering is verified",),
        resources=(entry.doc_url or "SAP Help Portal",),
    )


def _batch_input_guide(entry: CatalogEntry) -> ImplementationGuide:
    return ImplementationGuide(
        entry_id=entry.id,
        entry_name=entry.name,
        overview="Replace custom mass-update loops with standard batch input sessions.",
        prerequisites=("Recording authorization", "Sample data for the target transaction"),
        steps=_steps(
            ("Record Target Transaction",
             "Record the dialog steps of the transaction the loop emulates.",
             "SHDB", [], "1-2 hours"),
            ("Generate Batch Input Program",
             "Generate a program from the recording and map the input file.",
             None, [], "2-4 hours"),
            ("Process Sessions",
             "Run the sessions and review the logs.",
             "SM35", [], "1-2 hours"),
        ),
        testing=("Process a small session in test mode before the full load",),
        rollback=("Keep the original data extract for reversal",),
        resources=(entry.doc_url or "SAP Help Portal",),
    )


_PATTERN_GUIDES: dict[str, Callable[[CatalogEntry], ImplementationGuide]] = {
    PRICING_PROCEDURE: _pricing_guide,
    AUTHORIZATION_OBJECT: _authorization_guide,
    NUMBER_RANGE: _number_range_guide,
    BATCH_INPUT: _batch_input_guide,
}


def get_implementation_guide(entry: CatalogEntry) -> ImplementationGuide:
    """Return the guide for a catalog entry."""
    if entry.kind is EntryKind.INTERFACE:
        return _interface_guide(entry)
    if entry.kind is EntryKind.TRANSACTION:
        return _transaction_guide(entry)
    if entry.kind is EntryKind.PATTERN:
        builder = _PATTERN_GUIDES.get(entry.id, _generic_guide)
        return builder(entry)
    raise ValueError(f"Unhandled entry kind: {entry.kind!r}")


def format_guide_as_markdown(guide: ImplementationGuide) -> str:
    """Render a guide as markdown (prerequisites, steps, testing, rollback)."""
    lines = [f"# Implementation Guide: {guide.entry_name}", "", "## Overview", guide.overview, ""]

    lines.append("## Prerequisites")
    lines.extend(f"- {item}" for item in guide.prerequisites)
    lines.append("")

    lines.append("## Implementation Steps")
    lines.append("")
    for step in guide.steps:
        lines.append(f"### Step {step.number}: {step.title}")
        lines.append(step.description)
        if step.transaction_code:
            lines.append(f"**Transaction Code:** {step.transaction_code}")
        if step.notes:
            lines.extend(f"- {note}" for note in step.notes)
        if step.estimated_time:
            lines.append(f"**Estimated Time:** {step.estimated_time}")
        lines.append("")

    sections = [
        ("Testing", guide.testing),
        ("Rollback Plan", guide.rollback),
        ("Best Practices", guide.best_practices),
        ("Common Pitfalls", guide.common_pitfalls),
        ("Additional Resources", guide.resources),
    ]
    for title, items in sections:
        if not items:
            continue
        lines.append(f"## {title}")
        lines.extend(f"- {item}" for item in items)
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
