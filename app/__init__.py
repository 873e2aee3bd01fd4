"""
HR Careers Portal
Job postings, resume uploads and application notifications.

Architecture:
- MongoDB: Jobs and applications (documents, camelCase keys)
- Disk: Uploaded resumes, served under /uploads
- SMTP: HR notification + applicant confirmation
"""

__version__ = "1.0.0"
