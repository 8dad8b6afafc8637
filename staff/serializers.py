from rest_framework import serializers

from .models import TimeOff, WorkingHours


class WorkingHoursSerializer(serializers.ModelSerializer):
    start_time = serializers.TimeField(format="%H:%M", input_formats=["%H:%M"])
    end_time = serializers.TimeField(format="%H:%M", input_formats=["%H:%M"])

    class Meta:
        model = WorkingHours
        fields = ["id", "day_of_week", "start_time", "end_time", "is_off"]
        read_only_fields = ["id"]

    def validate(self, attrs):
        # A day marked off may carry any placeholder hours
        if not attrs.get("is_off", False) and attrs["end_time"] <= attrs["start_time"]:
            raise serializers.ValidationError("End time must be after start time.")
        return attrs


class TimeOffSerializer(serializers.ModelSerializer):
    class Meta:
        model = TimeOff
        fields = ["id", "start_date", "end_date", "reason"]
        read_only_fields = ["id"]

    def validate(self, attrs):
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError("Time off cannot end before it starts.")
        return attrs
