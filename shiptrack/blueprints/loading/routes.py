"""OGPL (manifest) routes"""
from flask import jsonify, request

from shiptrack.blueprints.loading import loading_bp
from shiptrack.blueprints.forms import (
    ManifestForm, BookingIdsForm, LoadingSessionForm, ManifestStatusForm, validated,
)
from shiptrack.services import ManifestService


@loading_bp.route('/ogpls', methods=['GET'])
def index():
    status = request.args.get('status', '').strip() or None
    service = ManifestService()
    manifests = service.store.list_manifests(status)
    return jsonify([service.manifest_detail(m.id) for m in manifests])


@loading_bp.route('/ogpls', methods=['POST'])
def create():
    form = validated(ManifestForm)
    service = ManifestService()
    manifest = service.create_manifest(form.booking_ids.data, form.manifest_data())
    return jsonify(service.manifest_detail(manifest.id)), 201


@loading_bp.route('/ogpls/<int:manifest_id>')
def detail(manifest_id):
    return jsonify(ManifestService().manifest_detail(manifest_id))


@loading_bp.route('/ogpls/<int:manifest_id>/status', methods=['PATCH'])
def update_status(manifest_id):
    form = validated(ManifestStatusForm)
    manifest = ManifestService().update_manifest_status(manifest_id, form.status.data)
    return jsonify(manifest.to_dict())


@loading_bp.route('/ogpls/<int:manifest_id>/bookings', methods=['POST'])
def add_bookings(manifest_id):
    form = validated(BookingIdsForm)
    manifest = ManifestService().add_bookings(manifest_id, form.ids)
    return jsonify(manifest.to_dict()), 201


@loading_bp.route('/ogpls/<int:manifest_id>/bookings', methods=['DELETE'])
def remove_bookings(manifest_id):
    form = validated(BookingIdsForm)
    manifest = ManifestService().remove_bookings(manifest_id, form.ids)
    return jsonify(manifest.to_dict())


@loading_bp.route('/ogpls/<int:manifest_id>/unload', methods=['POST'])
def unload(manifest_id):
    """Arrival at destination: every booking on board becomes unloaded"""
    manifest = ManifestService().complete_unloading(manifest_id)
    return jsonify(manifest.to_dict())


@loading_bp.route('/sessions', methods=['POST'])
def loading_session():
    form = validated(LoadingSessionForm)
    service = ManifestService()
    manifest = service.start_loading_session(form.ogpl_id.data, form.ids)
    return jsonify(service.manifest_detail(manifest.id)), 201
