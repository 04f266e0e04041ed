"""
HTTP surface of the job tracker (FastAPI).
"""
