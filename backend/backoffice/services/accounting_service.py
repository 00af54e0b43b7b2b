# Overview: Service-layer operations for the general ledger; balanced journal entries and their lines.

"""
Accounting Service

A journal entry is a header (date, reference, description, status) plus at
least two lines, each debiting or crediting one account. The entry must
balance: total debit and total credit may differ by at most BALANCE_TOLERANCE.

post_journal    header + lines in one transaction (status defaults to "posted")
update_journal  header fields are partial; sending "items" replaces every line
"""

from flask import current_app

from ..extensions import db
from ..models import ChartOfAccount, JournalEntry, JournalItem
from ..validation import FieldRule, ModelValidationPolicy, ValidationError, prefix_errors, validate_payload


ACCOUNT_TYPES = ("asset", "liability", "equity", "revenue", "expense")
JOURNAL_STATUSES = ("draft", "posted")
BALANCE_TOLERANCE = 0.01
MIN_JOURNAL_LINES = 2

JOURNAL_POLICY = ModelValidationPolicy(rules={
    "date": FieldRule(required=True),
    "reference": FieldRule(),
    "description": FieldRule(),
    "status": FieldRule(choices=JOURNAL_STATUSES),
})

JOURNAL_LINE_POLICY = ModelValidationPolicy(rules={
    "chart_of_account_id": FieldRule(required=True, exists=ChartOfAccount),
    "debit": FieldRule(min_value=0),
    "credit": FieldRule(min_value=0),
})


def _validate_lines(raw_items) -> list[dict]:
    if not isinstance(raw_items, list) or len(raw_items) < MIN_JOURNAL_LINES:
        raise ValidationError({
            "items": [f"The items field is required and must contain at least {MIN_JOURNAL_LINES} items."]
        })

    errors: dict[str, list[str]] = {}
    lines: list[dict] = []
    for i, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            errors[f"items.{i}"] = ["Each item must be an object."]
            continue
        try:
            line = validate_payload(model=JournalItem, payload=raw, policy=JOURNAL_LINE_POLICY, partial=False)
        except ValidationError as e:
            errors.update(prefix_errors(e.errors, f"items.{i}"))
            continue
        line["debit"] = line.get("debit") or 0
        line["credit"] = line.get("credit") or 0
        lines.append(line)

    if errors:
        raise ValidationError(errors)

    total_debit = sum(line["debit"] for line in lines)
    total_credit = sum(line["credit"] for line in lines)
    if abs(total_debit - total_credit) > BALANCE_TOLERANCE:
        raise ValidationError(
            {"items": [f"Total debit ({total_debit:.2f}) must equal total credit ({total_credit:.2f})."]},
            message="Journal entry is not balanced.",
        )
    return lines


def _validate_journal(payload: dict, *, partial: bool) -> tuple[dict, list[dict] | None]:
    if not isinstance(payload, dict):
        raise ValidationError({"payload": ["The payload must be a JSON object."]})

    errors: dict[str, list[str]] = {}
    header: dict = {}
    lines = None

    try:
        header = validate_payload(model=JournalEntry, payload=payload, policy=JOURNAL_POLICY, partial=partial)
    except ValidationError as e:
        errors.update(e.errors)

    if not partial or "items" in payload:
        try:
            lines = _validate_lines(payload.get("items"))
        except ValidationError as e:
            # An unbalanced entry keeps its own message when it is the only problem
            if not errors:
                raise
            errors.update(e.errors)

    if errors:
        raise ValidationError(errors)
    return header, lines


def _add_lines(entry: JournalEntry, lines: list[dict]) -> None:
    for line in lines:
        db.session.add(JournalItem(journal_entry_id=entry.id, **line))


def post_journal(payload: dict) -> JournalEntry:
    """
    Create a journal entry with its lines.

    Raises:
        ValidationError: If the header or any line is invalid, or the entry does not balance
    """
    header, lines = _validate_journal(payload, partial=False)
    if header.get("status") is None:
        header["status"] = "posted"

    entry = JournalEntry(**header)
    db.session.add(entry)
    db.session.flush()  # entry.id for the lines

    _add_lines(entry, lines)
    db.session.commit()

    current_app.logger.info("journal posted id=%s lines=%s", entry.id, len(lines))
    return entry


def update_journal(entry: JournalEntry, payload: dict) -> JournalEntry:
    """
    Apply header fields; when "items" is sent, replace every line.

    Raises:
        ValidationError: If a supplied field or any new line is invalid, or the entry does not balance
    """
    header, lines = _validate_journal(payload, partial=True)
    if "status" in header and header["status"] is None:
        header.pop("status")

    for key, value in header.items():
        setattr(entry, key, value)

    if lines is not None:
        for item in list(entry.items):
            db.session.delete(item)
        db.session.flush()
        _add_lines(entry, lines)

    db.session.commit()

    current_app.logger.info("journal updated id=%s fields=%s", entry.id, sorted(header))
    return entry
