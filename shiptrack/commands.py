import click
import random
from flask.cli import with_appcontext
from shiptrack.extensions import db
from shiptrack.models import Booking, Manifest, Warehouse, Location, InventoryRecord, StockMovement
from shiptrack.services import BookingService, WarehouseService
from shiptrack.utils.fake_gen import fake


@click.command('status')
@with_appcontext
def status():
    """Entity counts and the booking status summary."""
    click.echo(click.style('ShipTrack database status:', fg='cyan', bold=True))

    try:
        click.echo(f" - Bookings: \t\t{Booking.query.count()}")
        click.echo(f" - OGPLs: \t\t{Manifest.query.count()}")
        click.echo(f" - Warehouses: \t\t{Warehouse.query.count()}")
        click.echo(f" - Locations: \t\t{Location.query.count()}")
        click.echo(f" - Inventory rows: \t{InventoryRecord.query.count()}")
        click.echo(f" - Stock movements: \t{StockMovement.query.count()}")

        click.echo(click.style('Bookings by status:', fg='cyan'))
        for booking_status, count in BookingService().status_summary().items():
            click.echo(f"   {booking_status:<18}{count}")
    except Exception as e:
        click.echo(click.style(f'Database read failed: {e}', fg='red'))
        click.echo("Check that 'flask db upgrade' or 'flask seed' has been run")
        raise click.Abort()


@click.command('seed')
@click.option('--bookings', default=20, help='Number of bookings to create (default 20)')
@click.option('--warehouses', default=2, help='Number of warehouses (default 2)')
@with_appcontext
def seed(bookings, warehouses):
    """
    Recreate the schema and fill it with demo warehouses, locations,
    bookings and opening stock.
    Warning: drops all existing data!
    """
    click.echo(click.style('Seeding ShipTrack demo data...', fg='cyan', bold=True))

    db.drop_all()
    db.create_all()

    warehouse_service = WarehouseService()
    booking_service = BookingService()

    click.echo('Creating warehouses and locations...')
    locations = []
    for _ in range(warehouses):
        warehouse = warehouse_service.create_warehouse(
            f"{fake.city()} Hub",
            branch_id=random.randint(1, 3),
            address=fake.street_address(),
            city=fake.city(),
        )
        for row in range(2):
            for col in range(3):
                locations.append(warehouse_service.create_location(
                    warehouse.id, fake.slot_name(row, col), type=fake.location_type()))

    click.echo(f'Creating {bookings} bookings...')
    created = []
    for _ in range(bookings):
        created.append(booking_service.create_booking(
            customer_name=fake.company(),
            details=fake.consignment(),
            amount=round(random.uniform(500, 25000), 2),
            org_id=1,
            branch_id=random.randint(1, 3),
        ))

    click.echo('Receiving opening stock...')
    for location in locations:
        warehouse_service.inbound(location.id, fake.item_code(), random.randint(5, 50))

    click.echo(click.style('Seed complete.', fg='green', bold=True))
    click.echo(f"{warehouses} warehouses, {len(locations)} locations, {len(created)} bookings")
