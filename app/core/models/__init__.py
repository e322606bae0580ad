from app.core.models.school import School
from app.core.models.student import Student
