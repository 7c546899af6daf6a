"""
Contacts feature package.

Registration, the dashboard table (search, period filter, paging),
edit/delete and per-contact feedback notes.
"""
