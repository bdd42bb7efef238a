"""
Placeholder values substituted for fields missing from API responses.
"""

EMPTY_STRING = ""
UNKNOWN = "Unknown"
UNASSIGNED = "Unassigned"
NONE_VALUE = "None"

#
# Jira issue projection defaults
#
JIRA_DEFAULT_KEY = UNKNOWN
JIRA_NO_SUMMARY = "No Summary"
JIRA_DEFAULT_STATUS = UNKNOWN
JIRA_DEFAULT_PRIORITY = NONE_VALUE
JIRA_DEFAULT_ASSIGNEE = UNASSIGNED
JIRA_NO_DESCRIPTION = "No description"

#
# Confluence defaults
#
CONFLUENCE_DEFAULT_ID = "0"
CONFLUENCE_DEFAULT_TYPE = "page"
CONFLUENCE_DEFAULT_STATUS = "current"
