from .school import School
