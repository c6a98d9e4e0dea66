# scripts/init_db.py
# Creates the assessment table against DATABASE_URL and checks that every
# question bank loads.
from lhc.core.db import get_engine, init_db
from lhc.core.pool import get_pool
from lhc.core.report import get_grades
from lhc.core.settings import settings

init_db()
pool = get_pool()
grades = get_grades()
print(f"✅ Schema ensured on {get_engine().url!r}")
print(f"✅ Pool: {pool.stats['total']} questions {dict(pool.stats['byCategory'])} from {settings.BANKS_DIR}")
print(f"✅ Grade tiers: {[t.label for t in grades.tiers]}")
