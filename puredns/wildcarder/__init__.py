"""Detect and filter out DNS wildcard subdomains."""