from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# --- Enums / Literals ---
PersonStatus = Literal["ACTIVE", "INACTIVE"]
UserRole = Literal["ADMIN", "TEACHER", "MANAGER", "ACCOUNTANT", "PARENT", "VIEWER"]
StaffRole = Literal["MANAGER", "ACCOUNTANT"]
Gender = Literal["Nam", "Nữ", "Khác"]
AttendanceStatus = Literal["PRESENT", "ABSENT", "LATE", "UNMARKED"]
FeeType = Literal["PER_SESSION", "MONTHLY", "PER_COURSE"]
SalaryType = Literal["PER_SESSION", "MONTHLY"]
DayOfWeek = Literal[
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"
]
InvoiceStatus = Literal["UNPAID", "PAID", "CANCELLED"]
TransactionType = Literal["INVOICE", "PAYMENT", "ADJUSTMENT_CREDIT", "ADJUSTMENT_DEBIT"]
IncomeCategory = Literal["SALE", "EVENT", "OTHER"]
ExpenseCategory = Literal["SALARY", "RENT", "UTILITIES", "MARKETING", "SUPPLIES", "OTHER"]
CollectionName = Literal["students", "teachers", "staff", "classes"]

# Statuses that count as an attended session for billing.
ATTENDED_STATUSES: frozenset[str] = frozenset({"PRESENT", "LATE"})


class WireModel(BaseModel):
    """Base model: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- People ---

class Person(WireModel):
    id: str = ""
    name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    status: PersonStatus = "ACTIVE"
    created_at: str = ""
    password: str | None = None
    gender: Gender | None = None
    dob: str = ""


class Student(Person):
    parent_name: str = ""
    # Positive = credit owed to the student, negative = debt.
    balance: int = 0


class Teacher(Person):
    qualification: str = ""
    subject: str = ""
    role: Literal["TEACHER"] = "TEACHER"
    salary_type: SalaryType = "MONTHLY"
    rate: int = 0


class Staff(Person):
    position: str = ""
    role: StaffRole = "MANAGER"


# --- Classes ---

class ClassFee(WireModel):
    type: FeeType
    amount: int = 0


class ClassSchedule(WireModel):
    day_of_week: DayOfWeek
    start_time: str  # "HH:MM"
    end_time: str


class SchoolClass(WireModel):
    id: str = ""
    name: str
    subject: str = ""
    teacher_ids: list[str] = Field(default_factory=list)
    student_ids: list[str] = Field(default_factory=list)
    schedule: list[ClassSchedule] = Field(default_factory=list)
    fee: ClassFee


# --- Attendance & Reports ---

class AttendanceRecord(WireModel):
    id: str = ""
    class_id: str
    student_id: str
    date: str  # "YYYY-MM-DD"
    status: AttendanceStatus


class ProgressReport(WireModel):
    id: str = ""
    class_id: str
    student_id: str
    date: str
    score: float
    comments: str = ""
    created_by: str = ""


# --- Finance ---

class Invoice(WireModel):
    id: str
    student_id: str
    student_name: str
    month: str  # "YYYY-MM"
    amount: int
    details: str = ""
    status: InvoiceStatus = "UNPAID"
    generated_date: str
    paid_date: str | None = None


class Transaction(WireModel):
    id: str
    student_id: str
    date: str
    type: TransactionType
    description: str = ""
    # Positive for credits/payments, negative for debits/invoices.
    amount: int
    related_invoice_id: str | None = None


class Income(WireModel):
    id: str = ""
    description: str
    amount: int
    category: IncomeCategory = "OTHER"
    date: str


class Expense(WireModel):
    id: str = ""
    description: str
    amount: int
    category: ExpenseCategory = "OTHER"
    date: str


class Payroll(WireModel):
    id: str
    teacher_id: str
    teacher_name: str
    month: str
    sessions_taught: int = 0
    rate: int
    base_salary: int = 0
    total_salary: int
    calculation_date: str


class Announcement(WireModel):
    id: str = ""
    title: str
    content: str = ""
    created_at: str = ""
    created_by: str = ""
    class_id: str | None = None


# --- Config ---

class CenterSettings(WireModel):
    # Opaque to the core; unknown keys are carried through untouched.
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    name: str
    address: str | None = None
    phone: str | None = None
    logo_url: str = ""
    theme_color: str = "#4f46e5"
    sidebar_color: str | None = None
    theme: Literal["light", "dark"] = "light"
    onboarding_steps_completed: list[str] = Field(default_factory=list)
    locale: str | None = None
    bank_name: str | None = None
    bank_account_number: str | None = None
    bank_account_holder: str | None = None
    bank_bin: str | None = None
    qr_code_url: str | None = None
    admin_password: str | None = None
    viewer_account_active: bool | None = None
    login_header_content: str | None = None


# --- Aggregate Root ---

class Snapshot(WireModel):
    students: list[Student] = Field(default_factory=list)
    teachers: list[Teacher] = Field(default_factory=list)
    staff: list[Staff] = Field(default_factory=list)
    classes: list[SchoolClass] = Field(default_factory=list)
    attendance: list[AttendanceRecord] = Field(default_factory=list)
    invoices: list[Invoice] = Field(default_factory=list)
    progress_reports: list[ProgressReport] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
    income: list[Income] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    payrolls: list[Payroll] = Field(default_factory=list)
    # Newest first.
    announcements: list[Announcement] = Field(default_factory=list)
    settings: CenterSettings

    def to_wire(self) -> dict:
        """Serialize to the camelCase JSON document stored at the boundary."""
        return self.model_dump(mode="json", by_alias=True)

    def find_student(self, student_id: str) -> Student | None:
        return next((s for s in self.students if s.id == student_id), None)

    def find_teacher(self, teacher_id: str) -> Teacher | None:
        return next((t for t in self.teachers if t.id == teacher_id), None)

    def find_class(self, class_id: str) -> SchoolClass | None:
        return next((c for c in self.classes if c.id == class_id), None)

    def find_invoice(self, invoice_id: str) -> Invoice | None:
        return next((i for i in self.invoices if i.id == invoice_id), None)

    def find_transaction(self, transaction_id: str) -> Transaction | None:
        return next((t for t in self.transactions if t.id == transaction_id), None)
