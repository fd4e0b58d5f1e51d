from rest_framework import serializers


class AdviceRequestSerializer(serializers.Serializer):
    symptoms = serializers.CharField(help_text="Free-text symptom description. Aliases: symptomText, symptom_text.")
    obfuscationKey = serializers.CharField(
        required=False,
        help_text="When present the response text is XOR-obfuscated with this key and base64 encoded. Not encryption.",
    )


class AdviceResponseSerializer(serializers.Serializer):
    response = serializers.CharField(source="text")
    obfuscated = serializers.BooleanField()
