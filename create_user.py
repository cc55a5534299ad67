from app import create_app
from errors import ServiceError
from modules.roles.services import get_role_by_name
from modules.users.services import create_user as create_user_record

app = create_app()

def create_user(username, password, email, role=None, full_name=""):
    with app.app_context():
        payload = {
            "username": username,
            "password": password,
            "email": email,
            "fullName": full_name,
            "status": True,
        }
        if role:
            found = get_role_by_name(role)
            if found is None:
                print(f"⚠️  Role '{role}' does not exist. Run seed_roles.py --seed first.")
                return
            payload["role"] = found["id"]

        try:
            user = create_user_record(payload)
        except ServiceError as err:
            print(f"⚠️  {err.message}")
            return
        print(f"✅ Created user: {user['username']} (role: {role or '-'})")

if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='Create a new, already verified user.')
    parser.add_argument('username', help='Username')
    parser.add_argument('password', help='Password')
    parser.add_argument('email', help='Email')
    parser.add_argument('--role', help='Role name')
    parser.add_argument('--full-name', default='', help='Full name')

    args = parser.parse_args()
    create_user(args.username, args.password, args.email, args.role, args.full_name)
