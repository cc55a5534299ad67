from flask_sqlalchemy import SQLAlchemy

# Extensions are created unbound and attached in create_app()

# Database
db = SQLAlchemy()
