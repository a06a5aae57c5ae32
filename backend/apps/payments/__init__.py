"""
Payments app for hostel fee payments through Remita.
Provides REST API endpoints for generating payment references (RRR),
checking and verifying payment status, and reconciling pending payments.
"""
