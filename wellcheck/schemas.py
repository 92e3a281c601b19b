"""
Serialization schemas using Marshmallow for the Wellcheck API.

Request schemas validate and load JSON bodies; anything that fails
raises ``marshmallow.ValidationError``, which the error handlers turn
into a 400 with field-level messages. Response schemas shape models and
service results into camelCase JSON. Password hashes never leave the
service.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, pre_load, validate
from marshmallow_sqlalchemy import SQLAlchemyAutoSchema, auto_field

from .models import RATING_MAX, RATING_MIN, TIP_CATEGORIES, CheckinEntry, Tip, User


def _rating(name: str, **kwargs) -> fields.Integer:
    return fields.Integer(
        strict=True,
        validate=validate.Range(
            min=RATING_MIN,
            max=RATING_MAX,
            error=f"{name} must be between {RATING_MIN} and {RATING_MAX}",
        ),
        **kwargs,
    )


class RequestSchema(Schema):
    """Base for request bodies: unknown keys are ignored, not rejected."""

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def strip_email(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("email"), str):
            data = dict(data, email=data["email"].strip())
        return data


# --- auth -------------------------------------------------------------------


class RegisterSchema(RequestSchema):
    email = fields.Email(required=True, validate=validate.Length(max=255))
    password = fields.String(
        required=True,
        validate=validate.Length(min=6, error="Password must be at least 6 characters"),
    )
    name = fields.String(required=True, validate=validate.Length(min=2, max=200))


class LoginSchema(RequestSchema):
    email = fields.Email(required=True)
    password = fields.String(required=True, validate=validate.Length(min=1))


class UpdateProfileSchema(RequestSchema):
    name = fields.String(required=True, validate=validate.Length(min=2, max=200))
    email = fields.Email(required=True, validate=validate.Length(max=255))


class UpdatePasswordSchema(RequestSchema):
    current_password = fields.String(
        required=True, data_key="currentPassword", validate=validate.Length(min=1)
    )
    new_password = fields.String(
        required=True,
        data_key="newPassword",
        validate=validate.Length(min=6, error="New password must be at least 6 characters"),
    )


class DeleteAccountSchema(RequestSchema):
    password = fields.String(required=True, validate=validate.Length(min=1))


class UserSchema(SQLAlchemyAutoSchema):
    """Schema for serialising ``User`` objects."""

    created_at = auto_field(data_key="createdAt")

    class Meta:
        model = User
        exclude = ("password_hash",)


class AuthResponseSchema(Schema):
    token = fields.String()
    user_id = fields.Integer(data_key="userId")
    email = fields.String()
    name = fields.String()


# --- check-ins --------------------------------------------------------------


class CheckinCreateSchema(RequestSchema):
    mood = _rating("Mood", required=True)
    stress = _rating("Stress", required=True)
    sleep = _rating("Sleep", required=True)
    notes = fields.String(
        allow_none=True,
        validate=validate.Length(max=1000, error="Notes must not exceed 1000 characters"),
    )
    tags = fields.List(fields.String(validate=validate.Length(max=50)), allow_none=True)


class CheckinUpdateSchema(RequestSchema):
    """Every field is optional; only the ones present are applied."""

    mood = _rating("Mood")
    stress = _rating("Stress")
    sleep = _rating("Sleep")
    notes = fields.String(
        allow_none=True,
        validate=validate.Length(max=1000, error="Notes must not exceed 1000 characters"),
    )
    tags = fields.List(fields.String(validate=validate.Length(max=50)), allow_none=True)


class CheckinSchema(SQLAlchemyAutoSchema):
    """Schema for serialising ``CheckinEntry`` objects."""

    user_id = auto_field(data_key="userId")
    tags = fields.List(fields.String())
    created_at = auto_field(data_key="createdAt")
    updated_at = auto_field(data_key="updatedAt")

    class Meta:
        model = CheckinEntry
        include_fk = True


# --- tips -------------------------------------------------------------------


class TipCreateSchema(RequestSchema):
    title = fields.String(
        required=True,
        validate=validate.Length(min=1, max=200, error="Title must be 1 to 200 characters"),
    )
    description = fields.String(
        required=True,
        validate=validate.Length(min=1, max=1000, error="Description must be 1 to 1000 characters"),
    )
    icon = fields.String(allow_none=True, validate=validate.Length(max=100))
    color = fields.String(allow_none=True, validate=validate.Length(max=50))
    category = fields.String(allow_none=True, validate=validate.OneOf(TIP_CATEGORIES))


class TipUpdateSchema(RequestSchema):
    title = fields.String(allow_none=True, validate=validate.Length(max=200))
    description = fields.String(allow_none=True, validate=validate.Length(max=1000))
    icon = fields.String(allow_none=True, validate=validate.Length(max=100))
    color = fields.String(allow_none=True, validate=validate.Length(max=50))
    category = fields.String(allow_none=True, validate=validate.OneOf(TIP_CATEGORIES))


class TipSchema(SQLAlchemyAutoSchema):
    """Schema for serialising ``Tip`` objects."""

    created_at = auto_field(data_key="createdAt")
    updated_at = auto_field(data_key="updatedAt")

    class Meta:
        model = Tip


# --- reports ----------------------------------------------------------------


class AveragesSchema(Schema):
    mood = fields.Float()
    stress = fields.Float()
    sleep = fields.Float()


class DailyDataSchema(Schema):
    date = fields.Date()
    mood = fields.Integer()
    stress = fields.Integer()
    sleep = fields.Integer()


class WeeklyReportSchema(Schema):
    user_id = fields.Integer(data_key="userId")
    week_start = fields.DateTime(data_key="weekStart")
    week_end = fields.DateTime(data_key="weekEnd")
    averages = fields.Nested(AveragesSchema)
    daily_data = fields.List(fields.Nested(DailyDataSchema), data_key="dailyData")


class WeeklySummarySchema(Schema):
    week_number = fields.Integer(data_key="weekNumber")
    week_start = fields.Date(data_key="weekStart")
    week_end = fields.Date(data_key="weekEnd")
    averages = fields.Nested(AveragesSchema)
    checkin_count = fields.Integer(data_key="checkinCount")


class DaySummarySchema(DailyDataSchema):
    overall_score = fields.Float(data_key="overallScore")


class BestWorstDaysSchema(Schema):
    best_day = fields.Nested(DaySummarySchema, allow_none=True, data_key="bestDay")
    worst_day = fields.Nested(DaySummarySchema, allow_none=True, data_key="worstDay")


class MonthlyReportSchema(Schema):
    user_id = fields.Integer(data_key="userId")
    year = fields.Integer()
    month = fields.Integer()
    month_start = fields.Date(data_key="monthStart")
    month_end = fields.Date(data_key="monthEnd")
    averages = fields.Nested(AveragesSchema)
    previous_month_averages = fields.Nested(
        AveragesSchema, allow_none=True, data_key="previousMonthAverages"
    )
    weekly_summaries = fields.List(fields.Nested(WeeklySummarySchema), data_key="weeklySummaries")
    best_worst_days = fields.Nested(BestWorstDaysSchema, data_key="bestWorstDays")
    total_checkins = fields.Integer(data_key="totalCheckins")
    checkin_frequency = fields.Float(data_key="checkinFrequency")


# --- insights ---------------------------------------------------------------


class TrendAnalysisSchema(Schema):
    average = fields.Float()
    trend = fields.String()
    change_percentage = fields.Float(data_key="changePercentage")


class AlertSchema(Schema):
    type = fields.String()
    message = fields.String()
    category = fields.String()


class TrendsInsightSchema(Schema):
    user_id = fields.Integer(data_key="userId")
    period = fields.String()
    start_date = fields.DateTime(data_key="startDate")
    end_date = fields.DateTime(data_key="endDate")
    mood = fields.Nested(TrendAnalysisSchema, allow_none=True)
    stress = fields.Nested(TrendAnalysisSchema, allow_none=True)
    sleep = fields.Nested(TrendAnalysisSchema, allow_none=True)
    insights = fields.List(fields.String())
    alerts = fields.List(fields.Nested(AlertSchema))


class StreakSchema(Schema):
    user_id = fields.Integer(data_key="userId")
    current_streak = fields.Integer(data_key="currentStreak")
    longest_streak = fields.Integer(data_key="longestStreak")
    last_checkin_date = fields.Date(allow_none=True, data_key="lastCheckinDate")
    is_active = fields.Boolean(data_key="isActive")


class PeriodComparisonSchema(Schema):
    start_date = fields.DateTime(data_key="startDate")
    end_date = fields.DateTime(data_key="endDate")
    averages = fields.Nested(AveragesSchema)
    total_checkins = fields.Integer(data_key="totalCheckins")


class ComparisonMetricsSchema(Schema):
    mood_change = fields.Float(data_key="moodChange")
    stress_change = fields.Float(data_key="stressChange")
    sleep_change = fields.Float(data_key="sleepChange")
    overall_trend = fields.String(data_key="overallTrend")
    summary = fields.String()


class ComparisonSchema(Schema):
    user_id = fields.Integer(data_key="userId")
    period1 = fields.Nested(PeriodComparisonSchema)
    period2 = fields.Nested(PeriodComparisonSchema)
    comparison = fields.Nested(ComparisonMetricsSchema)
