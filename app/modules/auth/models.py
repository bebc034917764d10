# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - Session issuance for email, Google and Apple sign-in
# - Token refresh
# - JWT token generation and validation

"""
Supabase Auth provides:
- auth.get_user(jwt) - Verify a bearer token and return its user
- auth.get_session() - Current session on the mobile client
- auth.sign_in_with_id_token() - Exchange a Google/Apple identity token for a session
- auth.sign_out() - Revoke the current session

The proxy only needs the user's id and email; the id is the key of the
users, profiles and photos tables.
"""
