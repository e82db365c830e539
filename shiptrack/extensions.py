from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

# Extension objects, bound to the app in create_app
db = SQLAlchemy()
migrate = Migrate()
