from rest_framework import serializers


class ObjectIdField(serializers.Field):
    def to_representation(self, value):
        return str(value)


class BufferedFileSerializer(serializers.Serializer):
    originalname = serializers.CharField()
    filename = serializers.CharField()
    mimetype = serializers.CharField()
    size = serializers.IntegerField()
    path = serializers.CharField()


class FileEntrySerializer(serializers.Serializer):
    """
    A stored file entry. Keys missing from the document (older or partial
    entries) are left out of the output instead of failing the listing.
    """
    _id = ObjectIdField(required=False)
    originalname = serializers.CharField(required=False)
    filename = serializers.CharField(required=False)
    mimetype = serializers.CharField(required=False)
    size = serializers.IntegerField(required=False)
    path = serializers.CharField(required=False)
    pinata = serializers.JSONField(required=False)
    createdAt = serializers.DateTimeField(required=False)


class RecipientSerializer(serializers.Serializer):
    _id = ObjectIdField()
    name = serializers.CharField()
    files = FileEntrySerializer(many=True, default=list)
    createdAt = serializers.DateTimeField(required=False)


class RecipientFilesSerializer(serializers.Serializer):
    """Response body of GET /recipients/<id>/files."""
    success = serializers.SerializerMethodField()
    recipientId = ObjectIdField(source='_id')
    name = serializers.CharField()
    files = FileEntrySerializer(many=True, default=list)

    def get_success(self, obj):
        return True


class UploadResponseSerializer(serializers.Serializer):
    """Response body of POST /upload."""
    success = serializers.SerializerMethodField()
    file = BufferedFileSerializer()
    pinata = serializers.JSONField()
    recipient = RecipientSerializer(allow_null=True)

    def get_success(self, obj):
        return True
