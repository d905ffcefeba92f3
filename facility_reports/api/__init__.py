"""HTTP boundary for the report engine"""
