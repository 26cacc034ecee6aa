from rest_framework import serializers
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

User = get_user_model()

class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'email', 'first_name', 'last_name', 'role', 'is_staff']
        read_only_fields = ['is_staff', 'role']

class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    def validate(self, attrs):
        data = super().validate(attrs)
        data['user'] = UserSerializer(self.user).data

        # Candidates get their current admission status with the token
        candidate = getattr(self.user, 'candidate', None)
        if candidate is not None:
            data['user']['candidate'] = {
                'id': candidate.id,
                'full_name': candidate.full_name,
                'department': candidate.department.name if candidate.department else None,
                'admission_status': candidate.admission_status,
            }
        return data
