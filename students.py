#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Student roster (SQLite)

Commands:
  init                Create the operation log and the students table (no-op if present)
  drop                Drop and recreate the students table
  add                 Insert a student (id is caller assigned)
  update              Overwrite a student's names and birthday
  delete              Remove a student by id
  show                Print one student
  list                Print all students, or those born on --birthday

Notes:
- The DB file is resolved by roster.db.get_db_path(): ROSTER_DB_PATH, then config.yaml.
- Dates are YYYY-MM-DD; omit --birthday to store it as NULL.
"""

import argparse
import logging
import sys

from roster.logs import LogContext, ensure_log_schema
from roster.model import Student
from roster.services import student_svc
from roster.utils import dash_to_date


# errors reported to the user (and the history log) instead of a traceback
CLI_ERRORS = (ValueError, LookupError, RuntimeError)


def _fmt(s: dict) -> str:
    return f"{s['id']:>6}  {s['first_name']:<20} {s['last_name']:<20} {s['birthday'] or '-'}"


def cmd_init(args):
    ensure_log_schema()
    if student_svc.ensure_students_schema():
        print("students table created.")
    else:
        print("students table already exists.")


def cmd_drop(args):
    student_svc.reset_students_schema()
    print("students table dropped and recreated.")


def _student_from_args(args) -> Student:
    return Student(args.id, args.first_name, args.last_name, dash_to_date(args.birthday))


def cmd_add(args):
    log = LogContext("STUDENT_CREATE", user="cli")
    try:
        item = student_svc.create_student(_student_from_args(args), log)
    except CLI_ERRORS as e:
        log.write("ERROR", str(e))
        raise
    log.write("OK")
    print("Added:", _fmt(item))


def cmd_update(args):
    log = LogContext("STUDENT_UPDATE", user="cli")
    try:
        item = student_svc.update_student(_student_from_args(args), log)
    except CLI_ERRORS as e:
        log.write("ERROR", str(e))
        raise
    log.write("OK")
    print("Updated:", _fmt(item))


def cmd_delete(args):
    log = LogContext("STUDENT_DELETE", user="cli")
    try:
        student_svc.delete_student(args.id, log)
    except CLI_ERRORS as e:
        log.write("ERROR", str(e))
        raise
    log.write("OK")
    print("Deleted", args.id)


def cmd_show(args):
    print(_fmt(student_svc.get_student(args.id)))


def cmd_list(args):
    items = student_svc.list_students(dash_to_date(args.birthday))
    if not items:
        print("(empty)")
    for it in items:
        print(_fmt(it))


def _add_student_args(p):
    p.add_argument("--id", required=True, type=int)
    p.add_argument("--first_name", required=True)
    p.add_argument("--last_name", required=True)
    p.add_argument("--birthday", required=False, help="YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Student roster (SQLite)")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create schemas")
    p_init.set_defaults(func=cmd_init)

    p_drop = sub.add_parser("drop", help="drop and recreate the students table")
    p_drop.set_defaults(func=cmd_drop)

    p_add = sub.add_parser("add", help="add a student")
    _add_student_args(p_add)
    p_add.set_defaults(func=cmd_add)

    p_upd = sub.add_parser("update", help="update a student")
    _add_student_args(p_upd)
    p_upd.set_defaults(func=cmd_update)

    p_del = sub.add_parser("delete", help="delete a student")
    p_del.add_argument("--id", required=True, type=int)
    p_del.set_defaults(func=cmd_delete)

    p_show = sub.add_parser("show", help="show one student")
    p_show.add_argument("--id", required=True, type=int)
    p_show.set_defaults(func=cmd_show)

    p_list = sub.add_parser("list", help="list students")
    p_list.add_argument("--birthday", required=False, help="YYYY-MM-DD, exact match")
    p_list.set_defaults(func=cmd_list)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    try:
        args.func(args)
    except CLI_ERRORS as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
