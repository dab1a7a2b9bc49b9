"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .application.command_handlers import (
    BookingTransactionManager,
    CreateBookingCommand,
    DeleteBookingCommand,
    UpdateBookingCommand,
)
from .serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    BookingUpdateSerializer,
    BookingWithProductSerializer,
)


class BookingViewSet(viewsets.ViewSet):
    """Create, read, update and delete the caller's bookings.

    Updates and deletes are POST actions (``{id}/update/`` and
    ``{id}/destroy/``) so that clients limited to GET/POST can use them.
    """

    lookup_value_regex = r"\d+"

    def get_permissions(self):  # type: ignore
        if self.action == "create":
            # Guests may book anonymously by supplying customer_email
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "update_dates":
            return BookingUpdateSerializer
        if self.action == "list":
            return BookingWithProductSerializer
        return BookingSerializer

    def get_serializer(self, *args, **kwargs):  # type: ignore
        kwargs.setdefault("context", {"request": self.request, "view": self})
        return self.get_serializer_class()(*args, **kwargs)

    @property
    def manager(self) -> BookingTransactionManager:
        return BookingTransactionManager()

    def _principal_id(self):
        user = self.request.user
        return user.pk if user and user.is_authenticated else None

    def list(self, request):  # type: ignore
        bookings = self.manager.list_for(self._principal_id())
        return Response(self.get_serializer(bookings, many=True).data)

    def retrieve(self, request, pk=None):  # type: ignore
        booking = self.manager.get(int(pk), self._principal_id())
        return Response(self.get_serializer(booking).data)

    def create(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = self.manager.create(
            CreateBookingCommand(
                product_id=data["product_id"],
                start_booking_date=data["start_booking_date"],
                end_booking_date=data["end_booking_date"],
                principal_id=self._principal_id(),
                customer_name=data.get("customer_name", ""),
                customer_email=data.get("customer_email", ""),
            )
        )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"], url_path="update", url_name="update")
    def update_dates(self, request, pk=None):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = self.manager.update(
            UpdateBookingCommand(
                booking_id=int(pk),
                principal_id=self._principal_id(),
                start_booking_date=data["start_booking_date"],
                end_booking_date=data["end_booking_date"],
                customer_name=data.get("customer_name") or None,
            )
        )
        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=["post"], url_path="destroy", url_name="destroy")
    def destroy_booking(self, request, pk=None):  # type: ignore
        self.manager.delete(DeleteBookingCommand(booking_id=int(pk), principal_id=self._principal_id()))
        return Response({"message": "Booking deleted successfully"}, status=status.HTTP_200_OK)
