"""TalentFlow — job board backend.

Accounts register as ADMIN, RECRUITER or CANDIDATE and authenticate
with bearer tokens. Recruiters post and manage jobs, candidates apply,
and job owners move applications through their statuses.
"""

__version__ = "0.1.0"
