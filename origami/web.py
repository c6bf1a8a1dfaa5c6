"""Flask views that render the current snapshot."""

from __future__ import annotations

import logging

from flask import Flask, jsonify, render_template_string

from .models import TIMESTAMP_FORMAT, Snapshot
from .store import SnapshotStore

logger = logging.getLogger(__name__)

INDEX_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <title>OrigamiV2</title>
    <style>
        body {background-color: #3560A5;}
        #heading {background-color: #292A47; color: white; padding: 20px;}
        #heading a {color: white; text-decoration: none;}
        #last h3, #last h4 {color: #232326;}
        #data table {border: 2px solid;}
        #data th, #data td {border: 2px solid; color: white; padding: 4px 80px;}
        #data a {text-decoration: none; color: white;}
        #data a:hover {color: #2F2F35;}
    </style>
</head>
<body>
    <div id="heading">
        <h1>Origami V2</h1>
    </div>

    <div id="last">
        <h3>Last Updated @{{ last }}</h3>
        <h4>Next Update @{{ next }}</h4>
    </div>

    <div id="data">
        <table>
            <thead>
                <tr>
                    <th align="center"><h3>Printer Name</h3></th>
                    <th align="center"><h3>Toner Level</h3></th>
                    <th align="center"><h3>Cartridge Type</h3></th>
                </tr>
            </thead>
            <tbody>
            {% for row in printers %}
                <tr>
                    <td align="center"><h3><a href="{{ row.url }}" target="_blank">{{ row.name }}</a></h3></td>
                    <td align="center"><h3>{{ row.toner }}</h3></td>
                    <td align="center"><h3>{{ row.cartridge }}</h3></td>
                </tr>
            {% endfor %}
            </tbody>
        </table>
    </div>
</body>
</html>
"""

PENDING = "pending"


def create_app(store: SnapshotStore) -> Flask:
    """Build the Flask app serving ``store``'s current snapshot."""
    app = Flask(__name__)

    @app.route("/")
    def index():
        snapshot = store.current()
        return render_template_string(
            INDEX_TEMPLATE,
            printers=snapshot.rows,
            last=_display_time(snapshot, "last_updated"),
            next=_display_time(snapshot, "next_update"),
        )

    @app.route("/snapshot.json")
    def snapshot_json():
        return jsonify(store.current().to_dict())

    logger.debug("Web view created for %d printers", len(store.current().rows))
    return app


def _display_time(snapshot: Snapshot, attribute: str) -> str:
    value = getattr(snapshot, attribute)
    if value is None:
        return PENDING
    return value.strftime(TIMESTAMP_FORMAT)
