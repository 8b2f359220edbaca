from classroom.schemas.base import CamelModel
from classroom.schemas.user import UserSummary


class StudentPerformanceRead(CamelModel):
    id: str
    name: str
    email: str
    average_grade: int
    graded_count: int
    completed_assignments: int
    total_assignments: int
    status: str


class TopPerformerRead(CamelModel):
    rank: int
    id: str
    name: str
    average_grade: int
    percentage: int


class TeamMember(UserSummary):
    role: str  # "Teacher" | "Co-Teacher"


class TeacherPeopleOut(CamelModel):
    success: bool = True
    student_performance: list[StudentPerformanceRead]
    roster: list[UserSummary]
    shareable_link: str
    teacher_code: str
    student_code: str
    team_members: list[TeamMember]
    main_teacher: UserSummary
    co_teachers: list[UserSummary]
    is_main_teacher: bool


class StudentPeopleOut(CamelModel):
    success: bool = True
    current_student_average: int
    top_performers: list[TopPerformerRead]
    roster: list[UserSummary]
    shareable_link: str
