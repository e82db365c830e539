"""Warehouse, location and inventory movement routes"""
from flask import jsonify, request

from shiptrack.blueprints.warehouse import warehouse_bp
from shiptrack.blueprints.forms import (
    WarehouseForm, LocationForm, InboundForm, OutboundForm, TransferForm, validated,
)
from shiptrack.services import WarehouseService


@warehouse_bp.route('/warehouses', methods=['GET'])
def warehouses():
    return jsonify([w.to_dict() for w in WarehouseService().store.list_warehouses()])


@warehouse_bp.route('/warehouses', methods=['POST'])
def create_warehouse():
    form = validated(WarehouseForm)
    warehouse = WarehouseService().create_warehouse(
        form.name.data,
        branch_id=form.branch_id.data,
        address=form.address.data,
        city=form.city.data,
        status=form.status.data,
    )
    return jsonify(warehouse.to_dict()), 201


@warehouse_bp.route('/warehouses/<int:warehouse_id>')
def warehouse_detail(warehouse_id):
    warehouse = WarehouseService().store.require_warehouse(warehouse_id)
    data = warehouse.to_dict()
    data['locations'] = [l.to_dict() for l in warehouse.locations]
    return jsonify(data)


@warehouse_bp.route('/warehouse-locations', methods=['GET'])
def locations():
    warehouse_id = request.args.get('warehouse_id', type=int)
    return jsonify([l.to_dict() for l in WarehouseService().store.list_locations(warehouse_id)])


@warehouse_bp.route('/warehouse-locations', methods=['POST'])
def create_location():
    form = validated(LocationForm)
    location = WarehouseService().create_location(
        form.warehouse_id.data,
        form.name.data,
        type=form.type.data,
        capacity=form.capacity.data,
    )
    return jsonify(location.to_dict()), 201


@warehouse_bp.route('/warehouse-locations/<int:location_id>')
def location_detail(location_id):
    return jsonify(WarehouseService().store.require_location(location_id).to_dict())


@warehouse_bp.route('/inventory', methods=['GET'])
def inventory():
    location_id = request.args.get('location_id')
    item_id = request.args.get('item_id') or request.args.get('article_id')
    return jsonify({'quantity': WarehouseService().get_inventory(location_id, item_id)})


@warehouse_bp.route('/inventory/receive', methods=['POST'])
def receive():
    form = validated(InboundForm)
    quantity = WarehouseService().inbound(
        form.location_id.data,
        form.item_id.data,
        form.quantity.data,
        status=form.status.data or None,
        booking_id=form.booking_id.data,
        remark=form.remark.data,
    )
    return jsonify({'quantity': quantity})


@warehouse_bp.route('/inventory/dispatch', methods=['POST'])
def dispatch():
    form = validated(OutboundForm)
    quantity = WarehouseService().outbound(
        form.location_id.data,
        form.item_id.data,
        form.quantity.data,
        booking_id=form.booking_id.data,
        remark=form.remark.data,
    )
    return jsonify({'quantity': quantity})


@warehouse_bp.route('/inventory/transfer', methods=['POST'])
def transfer():
    form = validated(TransferForm)
    result = WarehouseService().transfer(
        form.from_location_id.data,
        form.to_location_id.data,
        form.item_id.data,
        form.quantity.data,
        remark=form.remark.data,
    )
    result['success'] = True
    return jsonify(result)


@warehouse_bp.route('/inventory/movements')
def movements():
    """Most recent stock movements, newest first"""
    location_id = request.args.get('location_id', type=int)
    item_id = request.args.get('item_id') or None
    limit = min(request.args.get('limit', 100, type=int), 500)
    rows = WarehouseService().movements(location_id, item_id, limit)
    return jsonify([m.to_dict() for m in rows])
