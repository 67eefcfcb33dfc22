# Recreates the salon_app database from scratch. DESTRUCTIVE: the existing
# database is dropped first. Run once per environment:
#       python run_sql.py [--dump schema.sql]
import sys
from salon_app.extensions import db
from salon_app.schema import render_ddl, reset_database
from main import create_app

app = create_app()

with app.app_context():
    tables = reset_database(db.engine)
    print(f"Created {len(tables)} tables: {', '.join(tables)}")

    if "--dump" in sys.argv:
        sql_path = sys.argv[sys.argv.index("--dump") + 1]
        with open(sql_path, "w") as f:
            f.write(render_ddl(dialect="mysql", database=db.engine.url.database))
        print(f"SQL script written to {sql_path}")

print("Schema created successfully!")
