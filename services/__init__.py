"""
services/ - Application Layer
=============================
Services open a unit of work, compose repository calls inside it and
return DTOs. Store errors are not translated here.
"""
