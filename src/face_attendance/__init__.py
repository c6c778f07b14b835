"""Face attendance package.

Organized by feature modules (geo, attendance, users, leaves, settings) with
a thin Flask controller layer over service/repository layers. The geofence
resolver and the daily attendance summarizer are pure and do no I/O.
"""
