# Overview: Service-layer hooks for HRM records; leave day counts, payroll amounts and document paths.

from ..validation import ValidationError, date_order


DOCUMENT_EXTENSIONS = ("pdf", "jpg", "jpeg", "png")
LEAVE_STATUSES = ("pending", "approved", "rejected")
PAYROLL_STATUSES = ("pending", "paid", "rejected")

_check_leave_dates = date_order("start_date", "end_date")


def prepare_leave(patch: dict, application=None) -> dict:
    """
    Check the leave period and derive its length.

    days = end_date - start_date + 1 (both ends count as leave days)
    """
    patch = _check_leave_dates(patch, application)
    if "start_date" in patch or "end_date" in patch:
        start = patch.get("start_date", getattr(application, "start_date", None))
        end = patch.get("end_date", getattr(application, "end_date", None))
        patch["days"] = (end - start).days + 1
    return patch


def prepare_payroll(patch: dict, payroll=None) -> dict:
    # Omitted or null totals fall back to zero
    for name in ("total_allowance", "total_deduction"):
        if name in patch and patch[name] is None:
            patch[name] = 0
    return patch


def prepare_document(patch: dict, document=None) -> dict:
    path = patch.get("document_file")
    if path is not None and path.rsplit(".", 1)[-1].lower() not in DOCUMENT_EXTENSIONS:
        raise ValidationError({
            "document_file": [f"The document file field must be a file of type: {', '.join(DOCUMENT_EXTENSIONS)}."]
        })
    return patch
