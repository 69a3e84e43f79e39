"""
Create a user (e.g. the first admin; registration always assigns role 'user'). Run from project root:
  python -m shop_api.scripts.create_user EMAIL NAME PASSWORD [role]
Example:
  python -m shop_api.scripts.create_user admin@shop.example "Shop Admin" your-secure-password admin
"""
import argparse
import sys

from pydantic import ValidationError

from shop_api.core.database import SessionLocal
from shop_api.core.errors import ConflictError
from shop_api.models import ROLES
from shop_api.schemas.auth import RegisterRequest
from shop_api.services.users import create_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a shop user from the command line.")
    parser.add_argument("email", help="Email address")
    parser.add_argument("name", help="Display name (2-100 chars)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=ROLES)
    args = parser.parse_args(argv)

    try:
        body = RegisterRequest(email=args.email, name=args.name, password=args.password)
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"Invalid {field}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = create_user(db, body.email, body.name, body.password, role=args.role)
    except ConflictError:
        print(f"User '{body.email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.email}' (id={user.id}) with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
