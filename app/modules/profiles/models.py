# Supabase tables: users, profiles, photos
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure (column names are camelCase):

users:
- id: uuid (primary key, references auth.users.id)
- email: text (nullable)
- displayName: text (nullable)
- surname: text (nullable)
- dob: date (nullable)
- gender: enum MALE | FEMALE | OTHER (nullable)
- lookingFor: enum[] (RELATIONSHIP, CASUAL_DATES, ...)
- interestedIn: enum[] (MALE, FEMALE, OTHER)
- height: text (nullable) - "<feet> <inches>"
- onboardingStep: int (default 1)
- onboardingCompleted: boolean (default false)

profiles:
- userId: uuid (primary key, references users.id)
- bio: text (nullable)
- prompts: jsonb - [{id?, question, answer}], 1-3 entries
- availableNext8Days: boolean[8]
- location: geography (written by the set_profile_location RPC)

photos:
- id: uuid (primary key)
- userId: uuid (references users.id)
- imageUrl: text - object storage key, not a public URL
- position: int (unique per userId; 0 is the primary photo)
- isPrimary: boolean
"""
