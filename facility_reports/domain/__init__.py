"""Report lifecycle and aggregation engine"""
