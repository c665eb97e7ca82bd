"""
Chambre API: Routes Package
=============================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - home.py:      GET  /                   (welcome HTML)
    - rooms.py:     GET  /rooms              (list, filter by available/type)
                    POST /rooms              (create)
                    GET  /rooms/{id}         (detail)
                    PUT  /rooms/{id}         (update supplied fields)
                    DELETE /rooms/{id}       (hard delete)
    - entities.py:  GET  /entities, POST /entities
    - health.py:    GET  /health             (service health check)

Routes stay thin: extract request data, call a service, return its result.
"""

from typing import Type

from pydantic import BaseModel


def json_body(model: Type[BaseModel]) -> dict:
    """OpenAPI fragment documenting a raw JSON body with the given model's schema."""
    return {
        "requestBody": {
            "content": {
                "application/json": {"schema": model.model_json_schema(by_alias=True)},
            },
        },
    }
