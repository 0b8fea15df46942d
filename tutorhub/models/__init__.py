from tutorhub.models.user import User
from tutorhub.models.tutor import Tutor
from tutorhub.models.course_category import CourseCategory
from tutorhub.models.course import Course
from tutorhub.models.enrollment import Enrollment
from tutorhub.models.booking import Booking
from tutorhub.models.payment import Payment
from tutorhub.models.review import Review
from tutorhub.models.review_request import ReviewRequest

# add ALL models here
