# Overview: Flask API routes for sale documents beyond CRUD; parses input and returns JSON responses.

"""Sale receipt route (CRUD for sales lives in the generic resource routes)."""

from flask import Blueprint, current_app, jsonify

from ..decorators import json_errors
from ..services import sales_service


sales_bp = Blueprint("sale_receipts", __name__, url_prefix="/api/pos/sales")


@sales_bp.get("/<int:sale_id>/receipt")
@json_errors
def sale_receipt_route(sale_id: int):
    """
    Printable receipt summary for a sale.

    Returns:
        {success, receipt: {business_name, invoice_no, date, terminal, customer,
                            items, subtotal, tax, discount, total, payments, notes}}
    """
    receipt = sales_service.build_receipt(
        sale_id,
        business_name=current_app.config.get("BUSINESS_NAME", "Hybrid Alpha ERP"),
    )
    return jsonify({"success": True, "receipt": receipt})
