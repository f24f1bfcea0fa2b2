from __future__ import annotations

from rpos.application.use_cases.seed_menu import SeedMenu
from rpos.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from rpos.infrastructure.db.schema import create_schema
from rpos.infrastructure.db.session import build_engine


def main() -> None:
    engine = build_engine(timeout_seconds=2.0)
    try:
        create_schema(engine)
        count = SeedMenu(SqlAlchemyMenuRepository(engine)).execute()
    finally:
        engine.dispose()
    print(f"seed complete: {count} menu items")


if __name__ == "__main__":
    main()
