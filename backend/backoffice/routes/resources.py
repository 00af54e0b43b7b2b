# Overview: Flask API routes for every registered resource; parses input and returns JSON responses.

"""
Resource Routes

One blueprint per ResourceConfig, all built by build_resource_blueprint():

    GET    <prefix>            list (keyword, limit, page, + config filters)
    POST   <prefix>            create              -> 201
    GET    <prefix>/<id>       show                -> 200 / 404
    PUT    <prefix>/<id>       update (partial ok) -> 200 / 404 / 422
    PATCH  <prefix>/<id>       update
    POST   <prefix>/<id>       update (form-post clients)
    DELETE <prefix>/<id>       delete              -> 200 / 404 / 409
"""

from flask import Blueprint, jsonify, request

from ..decorators import json_errors
from ..resources import RESOURCES, ResourceConfig
from ..services import resource_service


def _request_payload() -> dict:
    payload = request.get_json(silent=True)
    if payload is None and request.form:
        payload = request.form.to_dict()
    return payload if payload is not None else {}


def build_resource_blueprint(config: ResourceConfig) -> Blueprint:
    bp = Blueprint(config.name, __name__, url_prefix=config.url_prefix)

    @bp.get("")
    @json_errors
    def list_route():
        """
        Query parameters:
        - keyword: case-insensitive substring over the resource's search fields
        - limit: page size; absent returns the whole collection
        - page: page number (1-indexed, only with limit)
        - start_date / end_date: inclusive bounds on resources with a date column
        """
        result = resource_service.list_records(
            config,
            keyword=request.args.get("keyword", ""),
            limit=request.args.get("limit"),
            page=request.args.get("page", 1, type=int),
            filters={name: request.args.get(name) for name in config.query_params},
        )
        return jsonify({
            "message": f"{config.plural} fetched successfully",
            "pagination": result,
        })

    @bp.post("")
    @json_errors
    def create_route():
        record = resource_service.create_record(config, _request_payload())
        body = {
            "success": True,
            "message": config.create_message or f"{config.singular} created successfully",
            "data": record.to_dict(include=config.create_relations),
        }
        if config.create_extras is not None:
            body.update(config.create_extras(record))
        return jsonify(body), 201

    @bp.get("/<int:record_id>")
    @json_errors
    def show_route(record_id: int):
        record = resource_service.get_record(config, record_id, include=config.show_relations)
        return jsonify({
            "success": True,
            "message": f"{config.singular} fetched successfully",
            "data": record.to_dict(include=config.show_relations),
        })

    @bp.route("/<int:record_id>", methods=["PUT", "PATCH", "POST"])
    @json_errors
    def update_route(record_id: int):
        record = resource_service.update_record(config, record_id, _request_payload())
        return jsonify({
            "success": True,
            "message": f"{config.singular} updated successfully",
            "data": record.to_dict(include=config.update_relations),
        })

    @bp.delete("/<int:record_id>")
    @json_errors
    def delete_route(record_id: int):
        resource_service.delete_record(config, record_id)
        return jsonify({
            "success": True,
            "message": f"{config.singular} deleted successfully",
        })

    return bp


def register_resource_blueprints(app) -> None:
    for config in RESOURCES:
        app.register_blueprint(build_resource_blueprint(config))
