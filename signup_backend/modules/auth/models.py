# Supabase table: accounts
# Operations are handled via the Supabase SDK in repository.py

"""
Expected Supabase table structure:

accounts:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null)
- email: text (unique, not null) - login key
- password_hash: text (not null) - bcrypt hash, never the plaintext
- photo_url: text (not null) - public URL returned by the image host
- created_at: timestamp (default: now())

    create table accounts (
        id uuid primary key default gen_random_uuid(),
        name text not null check (name <> ''),
        email text not null unique check (email <> ''),
        password_hash text not null check (password_hash <> ''),
        photo_url text not null check (photo_url <> ''),
        created_at timestamptz not null default now()
    );

The unique constraint on email is what keeps two concurrent signups from
both succeeding; the repository maps its violation (23505) to
EmailAlreadyRegistered.
"""

from pydantic import BaseModel


class Account(BaseModel):
    name: str
    email: str
    password_hash: str
    photo_url: str
