"""
Students app for hostel registration.
Holds student records, their registration satellites and the registration API.
"""
