# Shared helpers for the Campus Mart backend
