import os
from shiptrack import create_app, db
from shiptrack.models import (
    Booking, Manifest,
    Warehouse, Location, InventoryRecord, StockMovement,
)

# FLASK_ENV or FLASK_CONFIG picks the configuration
config_name = os.getenv('FLASK_ENV') or os.getenv('FLASK_CONFIG') or 'default'
if config_name in ('development', 'dev'):
    config_name = 'development'

app = create_app(config_name)


@app.shell_context_processor
def make_shell_context():
    """
    Objects preloaded by 'flask shell'.
    """
    return dict(
        db=db,
        app=app,
        Booking=Booking,
        Manifest=Manifest,
        Warehouse=Warehouse,
        Location=Location,
        InventoryRecord=InventoryRecord,
        StockMovement=StockMovement,
    )


if __name__ == '__main__':
    app.logger.info('ShipTrack API starting on 0.0.0.0:5000')
    app.run(host='0.0.0.0', port=5000)
