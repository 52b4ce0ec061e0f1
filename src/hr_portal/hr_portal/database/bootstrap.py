from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DemoAccount:
    full_name: str
    email: str
    employee_code: str
    password: str
    role: str
    department: str
    designation: str
    salary: Decimal


DEMO_ACCOUNTS = (
    DemoAccount("Admin Demo", "admin@example.com", "ADM0001", "admin1234", "admin", "HR", "HR Manager", Decimal("0")),
    DemoAccount("Jane Employee", "jane@example.com", "EMP0001", "employee123", "employee", "Engineering", "Developer", Decimal("50000")),
)


@contextmanager
def _connection(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        connection_timeout=target.connect_timeout,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    conn = mysql.connector.connect(**kwargs)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql usable regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted strings and '--' comments."""

    buf: list[str] = []
    quote: str | None = None
    escape = False
    lines = [ln for ln in sql.splitlines() if not ln.lstrip().startswith("--")]

    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue
        if ch == "\\" and quote:
            buf.append(ch)
            escape = True
            continue
        if ch in ("'", '"'):
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
            buf.append(ch)
            continue
        if ch == ";" and quote is None:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: str | Path) -> int:
    target = DBConfig.from_settings(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    count = 0
    with _connection(target) as conn:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
    return count


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_settings(db_config)
    with _connection(target, with_database=False) as conn:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_script(db_config, schema_path)
    logger.info("Applied %s statements from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    seed_path = Path(seed_path)
    if not seed_path.exists():
        logger.info("No seed file at %s, skipping", seed_path)
        return
    count = _run_script(db_config, seed_path)
    logger.info("Applied %s statements from %s", count, seed_path)


def ensure_demo_users(db_config: dict) -> None:
    target = DBConfig.from_settings(db_config)
    with _connection(target) as conn:
        cur = conn.cursor(dictionary=True)
        for account in DEMO_ACCOUNTS:
            cur.execute(
                """
                INSERT INTO employees(
                    full_name, email, employee_code, password_hash, role,
                    department, designation, salary, is_active
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,1)
                ON DUPLICATE KEY UPDATE
                    full_name=VALUES(full_name), password_hash=VALUES(password_hash),
                    role=VALUES(role), is_active=1
                """,
                (
                    account.full_name,
                    account.email,
                    account.employee_code,
                    generate_password_hash(account.password),
                    account.role,
                    account.department,
                    account.designation,
                    account.salary,
                ),
            )
    logger.info("Demo accounts ready: %s", ", ".join(a.email for a in DEMO_ACCOUNTS))


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_settings(db_config)
    with _connection(target) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
