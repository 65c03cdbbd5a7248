"""
Default dataset used to seed an empty store and to reset it.
"""

from __future__ import annotations

from educenter.domain.entities import (
    CenterSettings,
    ClassFee,
    ClassSchedule,
    SchoolClass,
    Snapshot,
    Staff,
    Student,
    Teacher,
)


def get_default_settings() -> CenterSettings:
    return CenterSettings(
        name="EduCenter Pro",
        address="",
        phone="",
        logo_url="",
        theme_color="#4f46e5",
        sidebar_color="#111827",
        theme="light",
        onboarding_steps_completed=["students", "classes", "teachers"],
        locale="vi-VN",
        bank_name="",
        bank_account_number="",
        bank_account_holder="",
        bank_bin="",
        qr_code_url="",
        admin_password="123456",
        viewer_account_active=True,
    )


def get_default_snapshot() -> Snapshot:
    """
    Build a fresh copy of the seed dataset.

    A new object graph is returned on every call so callers may mutate it.
    """
    students = [
        Student(
            id="HS001", name="Hoàng Thị Xuân", created_at="2025-10-19", dob="2013-01-01",
            parent_name="Đào Thị Xuyến", email="hs001@example.com", phone="0372624435",
        ),
        Student(
            id="HS002", name="Lê Gia Bảo", created_at="2025-10-19", dob="2013-01-01",
            parent_name="Đỗ Thị Ngọ", email="hs002@example.com", phone="0868899158",
        ),
        Student(
            id="HS003", name="Đào Quang Vĩnh Hưng", created_at="2025-10-19", dob="2013-01-01",
            parent_name="Hoàng Thị Liên", email="hs003@example.com", phone="0978282633",
        ),
    ]
    teachers = [
        Teacher(
            id="DAT", name="Lê Văn Đạt", created_at="2025-10-19", dob="1989-02-28",
            subject="Toán", qualification="Cử nhân Sư phạm", email="dat.lv@example.com",
            phone="0822448444", salary_type="PER_SESSION", rate=200000,
        ),
        Teacher(
            id="QUYEN", name="Đào Thị Quyến", created_at="2025-10-19", dob="1989-12-01",
            subject="Đa năng", salary_type="MONTHLY", rate=5000000,
        ),
    ]
    staff = [
        Staff(
            id="NV01", name="Nguyễn Văn An", created_at="2025-10-19", dob="1990-05-12",
            position="Nhân viên", role="MANAGER",
        ),
    ]
    classes = [
        SchoolClass(
            id="L01",
            name="Toán 6 cơ bản",
            subject="Toán",
            teacher_ids=["DAT", "QUYEN"],
            student_ids=["HS001", "HS002", "HS003"],
            schedule=[
                ClassSchedule(day_of_week="Thursday", start_time="15:00", end_time="16:45"),
                ClassSchedule(day_of_week="Sunday", start_time="15:00", end_time="16:45"),
            ],
            fee=ClassFee(type="PER_SESSION", amount=50000),
        ),
    ]
    return Snapshot(
        students=students,
        teachers=teachers,
        staff=staff,
        classes=classes,
        settings=get_default_settings(),
    )
