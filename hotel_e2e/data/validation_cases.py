"""Reservation form validation cases (VAL-101 .. VAL-106)."""

from __future__ import annotations

from hotel_e2e.models.test_case import FormAction, ValidationTestCase

TEST_USER_NAME = "テスト太郎"
TEST_EMAIL = "test@example.com"
TEST_PHONE = "03-1234-5678"
INVALID_EMAIL = "invalid-email"
ZERO_STAY_DAYS = "0"

REQUIRED_FIELD = "このフィールドを入力してください。"
INVALID_STAY_DAYS = "1以上の値を入力してください"
INVALID_EMAIL_MESSAGE = "メールアドレスを入力してください。"

_NAME = FormAction(action_type="name", value=TEST_USER_NAME)
_CONTACT_EMAIL = FormAction(action_type="contact", value="email")
_CONTACT_TEL = FormAction(action_type="contact", value="tel")
_EMAIL = FormAction(action_type="email", value=TEST_EMAIL)
_ZERO_DAYS = FormAction(action_type="stay_days", value=ZERO_STAY_DAYS)

VALIDATION_TEST_CASES: tuple[ValidationTestCase, ...] = (
    ValidationTestCase(
        name="宿泊数に0を入力するとエラーメッセージが表示される",
        description="宿泊数に0を入力した場合、適切なバリデーションエラーメッセージが表示されることを検証します",
        severity="critical",
        issue_id="VAL-101",
        setup=(_ZERO_DAYS, _NAME, _CONTACT_EMAIL, _EMAIL),
        expected_errors={"term": INVALID_STAY_DAYS},
    ),
    ValidationTestCase(
        name="氏名を入力しないとエラーメッセージが表示される",
        description="氏名を入力せずにフォームを送信した場合、適切なバリデーションエラーメッセージが表示されることを検証します",
        severity="critical",
        issue_id="VAL-102",
        setup=(_CONTACT_EMAIL, _EMAIL),
        expected_errors={"username": REQUIRED_FIELD},
    ),
    ValidationTestCase(
        name="メールアドレスの形式が不正な場合にエラーメッセージが表示される",
        description="不正な形式のメールアドレスを入力した場合、適切なバリデーションエラーメッセージが表示されることを検証します",
        severity="critical",
        issue_id="VAL-103",
        setup=(_NAME, _CONTACT_EMAIL, FormAction(action_type="email", value=INVALID_EMAIL)),
        expected_errors={"email": INVALID_EMAIL_MESSAGE},
    ),
    ValidationTestCase(
        name="電話番号を選択したが入力しない場合にエラーメッセージが表示される",
        description="連絡方法として電話番号を選択したが電話番号を入力しない場合、適切なバリデーションエラーメッセージが表示されることを検証します",
        severity="critical",
        issue_id="VAL-104",
        setup=(_NAME, _CONTACT_TEL),
        expected_errors={"tel": REQUIRED_FIELD},
    ),
    ValidationTestCase(
        name="すべての必須項目に有効な値を入力すると確認ページに遷移する",
        description="すべての必須項目に有効な値を入力した場合、バリデーションが通過し確認ページに遷移することを検証します",
        severity="critical",
        issue_id="VAL-105",
        setup=(_NAME, _CONTACT_EMAIL, _EMAIL),
        is_positive=True,
    ),
    ValidationTestCase(
        name="複数のフィールドにエラーがある場合、すべてのエラーメッセージが表示される",
        description="複数のフィールドに無効な値がある場合、すべてのフィールドに対応するエラーメッセージが表示されることを検証します",
        severity="high",
        issue_id="VAL-106",
        setup=(_ZERO_DAYS, _CONTACT_EMAIL),
        expected_errors={
            "term": INVALID_STAY_DAYS,
            "username": REQUIRED_FIELD,
            "email": REQUIRED_FIELD,
        },
    ),
)
