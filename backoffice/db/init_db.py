"""Database bootstrapping utilities."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from backoffice.core.config import get_settings
from backoffice.core.constants import (
    DEFAULT_ADMIN_NAME,
    HOME_MENU_ICON,
    HOME_MENU_NAME,
    HOME_MENU_URL,
    SUPER_ADMIN_AUTHORITY,
)
from backoffice.core.enums import MenuTypeEnum
from backoffice.core.security import get_password_hash
from backoffice.db import session as db_session
from backoffice.models import Admin, Code, CodeGroup, Menu
from backoffice.models.base import Base
from backoffice.utils.authority import ALWAYS_VISIBLE_MENU_ID

logger = logging.getLogger(__name__)

_MENU_TYPE_CODE_GROUP = "MENU_TYPE"
_MENU_TYPE_CODES = (
    (MenuTypeEnum.GROUP.value, "菜单组", 1),
    (MenuTypeEnum.PAGE.value, "页面", 2),
    (MenuTypeEnum.WINDOW.value, "新窗口", 3),
)


def init_db() -> None:
    """Create all database tables if they do not exist and seed baseline data."""
    Base.metadata.create_all(bind=db_session.engine)

    session = db_session.SessionLocal()
    try:
        _seed_default_admin(session)
        _seed_home_menu(session)
        _seed_menu_type_codes(session)
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to seed default data during database initialization")
        raise
    finally:
        session.close()


def _seed_default_admin(db: Session) -> None:
    settings = get_settings()
    admin = db.query(Admin).filter(Admin.username == settings.default_admin_username).first()
    if admin is not None:
        return
    db.add(
        Admin(
            username=settings.default_admin_username,
            hashed_password=get_password_hash(settings.default_admin_password),
            name=DEFAULT_ADMIN_NAME,
            authority=SUPER_ADMIN_AUTHORITY,
            is_active=True,
        )
    )
    db.flush()
    logger.info("Seeded default admin account '%s'", settings.default_admin_username)


def _seed_home_menu(db: Session) -> None:
    """首页菜单必须是第一条菜单记录，以占用固定 ID。"""
    if db.get(Menu, ALWAYS_VISIBLE_MENU_ID) is not None:
        return
    if db.query(Menu.id).first() is not None:
        logger.warning("Menu table is not empty but menu #%s is missing", ALWAYS_VISIBLE_MENU_ID)
        return
    db.add(
        Menu(
            name=HOME_MENU_NAME,
            type=MenuTypeEnum.PAGE.value,
            parent_id=None,
            is_using=True,
            display_order=0,
            url=HOME_MENU_URL,
            icon=HOME_MENU_ICON,
        )
    )
    db.flush()


def _seed_menu_type_codes(db: Session) -> None:
    group = db.query(CodeGroup).filter(CodeGroup.code_group == _MENU_TYPE_CODE_GROUP).first()
    if group is not None:
        return
    db.add(CodeGroup(code_group=_MENU_TYPE_CODE_GROUP, name="菜单类型"))
    for code, name, order in _MENU_TYPE_CODES:
        db.add(
            Code(
                code_group=_MENU_TYPE_CODE_GROUP,
                code=code,
                name=name,
                is_using=True,
                display_order=order,
            )
        )
    db.flush()
