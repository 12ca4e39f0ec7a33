"""Shared fixtures: a small Heroku-style Hyper-Schema document."""

import copy
import json
from typing import Any

import pytest

from go_hyperschema_generator.parser.schema import Schema

APP_IDENTITY_HREF = "/apps/{(%23%2Fdefinitions%2Fapp%2Fdefinitions%2Fidentity)}"

APP_DOCUMENT: dict[str, Any] = {
    "title": "Heroku Platform API",
    "version": "3",
    "definitions": {
        "app": {
            "title": "App",
            "description": "An app represents the program that you would like to deploy and run on Heroku.",
            "type": ["object"],
            "definitions": {
                "id": {"description": "unique identifier of app", "type": ["string"], "format": "uuid"},
                "name": {"description": "unique name of app", "type": ["string"]},
                "identity": {
                    "anyOf": [
                        {"$ref": "#/definitions/app/definitions/id"},
                        {"$ref": "#/definitions/app/definitions/name"},
                    ]
                },
                "created_at": {"description": "when app was created", "type": ["string"], "format": "date-time"},
                "maintenance": {"description": "maintenance status of app", "type": ["boolean"]},
            },
            "properties": {
                "created_at": {"$ref": "#/definitions/app/definitions/created_at"},
                "id": {"$ref": "#/definitions/app/definitions/id"},
                "maintenance": {"$ref": "#/definitions/app/definitions/maintenance"},
                "name": {"$ref": "#/definitions/app/definitions/name"},
            },
            "links": [
                {
                    "title": "Create",
                    "description": "Create a new app.",
                    "href": "/apps",
                    "method": "POST",
                    "rel": "create",
                    "schema": {
                        "properties": {"name": {"$ref": "#/definitions/app/definitions/name"}},
                        "type": ["object"],
                    },
                },
                {
                    "title": "Delete",
                    "description": "Delete an existing app.",
                    "href": APP_IDENTITY_HREF,
                    "method": "DELETE",
                    "rel": "destroy",
                },
                {
                    "title": "Info",
                    "description": "Info for existing app.",
                    "href": APP_IDENTITY_HREF,
                    "method": "GET",
                    "rel": "self",
                },
                {
                    "title": "List",
                    "description": "List existing apps.",
                    "href": "/apps",
                    "method": "GET",
                    "rel": "instances",
                },
                {
                    "title": "Update",
                    "description": "Update an existing app.",
                    "href": APP_IDENTITY_HREF,
                    "method": "PATCH",
                    "rel": "update",
                    "schema": {
                        "properties": {
                            "maintenance": {"$ref": "#/definitions/app/definitions/maintenance"},
                            "name": {"$ref": "#/definitions/app/definitions/name"},
                        },
                        "required": ["name"],
                        "type": ["object"],
                    },
                },
            ],
        },
        "config-var": {
            "title": "Config Vars",
            "type": ["object"],
            "patternProperties": {"^\\w+$": {"type": ["string", "null"]}},
            "links": [
                {
                    "title": "Info",
                    "href": "/apps/{(%23%2Fdefinitions%2Fapp%2Fdefinitions%2Fidentity)}/config-vars",
                    "method": "GET",
                    "rel": "self",
                },
            ],
        },
    },
    "properties": {
        "app": {"$ref": "#/definitions/app"},
        "config-var": {"$ref": "#/definitions/config-var"},
    },
    "links": [{"href": "https://api.heroku.com", "rel": "self"}],
}


@pytest.fixture
def app_document() -> dict[str, Any]:
    """A fresh copy of the sample document, safe to mutate."""
    return copy.deepcopy(APP_DOCUMENT)


@pytest.fixture
def app_schema(app_document: dict[str, Any]) -> Schema:
    """The sample document as an unresolved schema tree."""
    return Schema.from_dict(app_document)


@pytest.fixture
def app_json(app_document: dict[str, Any]) -> str:
    """The sample document as JSON text."""
    return json.dumps(app_document)
